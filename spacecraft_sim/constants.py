"""
Spacecraft Mission Simulation - Nominal Profile Values and Thresholds

This module defines every constant used by the mission simulation: the
launch site, the per-phase tick profiles, the fuel consumption model,
safety thresholds and the navigational envelope.

Units: altitude in km, velocity in km/s, fuel in percent of a full tank,
time in simulated seconds.
"""

# =============================================================================
# INITIAL CONDITIONS
# =============================================================================

INITIAL_FUEL_LEVEL = 100.0  # % (full tank)
INITIAL_ALTITUDE = 0.0  # km
INITIAL_VELOCITY = 0.0  # km/s

# Launch site: Akyaka, Mugla
LAUNCH_LATITUDE = 37.1054  # deg
LAUNCH_LONGITUDE = 28.3271  # deg

# =============================================================================
# FUEL CONSUMPTION MODEL
# consumption = base + velocity * VELOCITY_FACTOR + altitude * ALTITUDE_FACTOR
# =============================================================================

VELOCITY_CONSUMPTION_FACTOR = 0.1  # % per (km/s)
ALTITUDE_CONSUMPTION_FACTOR = 0.01  # % per km

# =============================================================================
# LAUNCH PROFILE
# =============================================================================

LAUNCH_BASE_CONSUMPTION = 2.0  # % per tick
LAUNCH_ALTITUDE_STEP = 10.0  # km per tick
LAUNCH_VELOCITY_STEP = 1.0  # km/s per tick
ORBIT_ALTITUDE = 100.0  # km (orbit achieved at or above)

# =============================================================================
# ORBIT PROFILE
# =============================================================================

ORBIT_BASE_CONSUMPTION = 1.0  # % per tick
ORBIT_STABILIZATION_TICKS = 5
LONGITUDE_RATE = 0.01  # deg per (km/s) per tick
LATITUDE_RATE = 0.005  # deg per (km/s) per tick

# =============================================================================
# RETURN PROFILE
# =============================================================================

RETURN_BASE_CONSUMPTION = 1.5  # % per tick
RETURN_ALTITUDE_STEP = 10.0  # km per tick
RETURN_VELOCITY_STEP = 0.5  # km/s per tick

# =============================================================================
# EMERGENCY PROCEDURE
# =============================================================================

EMERGENCY_BASE_CONSUMPTION = 1.0  # % per tick
EMERGENCY_ALTITUDE_STEP = 10.0  # km per tick
EMERGENCY_VELOCITY_STEP = 0.1  # km/s per tick
EMERGENCY_ENTRY_ALTITUDE = 100.0  # km (forced descent starts here)
EMERGENCY_ENTRY_VELOCITY = 1.0  # km/s
PASSIVE_DECAY_ALTITUDE = 50.0  # km lost in the unpowered orbit-decay posture

# =============================================================================
# SAFETY THRESHOLDS
# =============================================================================

CRITICAL_FUEL_LEVEL = 10.0  # % (fault at or below)
ALTITUDE_CEILING = 300.0  # km (fault above)

# Dwell before a stalled orbit fault escalates automatically (30 min)
FAULT_DWELL_SECONDS = 30.0 * 60.0

# =============================================================================
# NAVIGATIONAL ENVELOPE
# =============================================================================

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
LONGITUDE_SPAN = 360.0
MAX_LONGITUDE = 180.0

ALTITUDE_FLOOR = 0.0  # km
BASELINE_ALTITUDE = 100.0  # km (re-acquisition after a deviation)
BASELINE_VELOCITY = 1.0  # km/s

# =============================================================================
# SIMULATION TIMING
# =============================================================================

TICK_SECONDS = 1.0  # simulated seconds per tick
TICK_DELAY = 0.0  # wall-clock pacing per tick (s); 1.0 for a live demo

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

ZERO_TOLERANCE = 1e-9
