"""
Spacecraft Mission Simulation - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different mission profiles, thresholds and pacing to be passed
without modifying global constants.

Optional behaviour (automatic backup activation, live pacing, fault log file)
defaults to OFF so a default run reproduces the nominal mission.
"""

from dataclasses import dataclass
from typing import Optional

from . import constants as C


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation parameters.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Simulation timing
      2. Launch profile
      3. Orbit profile
      4. Return profile
      5. Emergency procedure
      6. Safety thresholds / envelope
      7. Orbit hold
      8. Output
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    tick_seconds: float = C.TICK_SECONDS
    tick_delay: float = C.TICK_DELAY

    # ── 2. Launch profile ────────────────────────────────────────────────
    launch_base_consumption: float = C.LAUNCH_BASE_CONSUMPTION
    launch_altitude_step: float = C.LAUNCH_ALTITUDE_STEP
    launch_velocity_step: float = C.LAUNCH_VELOCITY_STEP
    orbit_altitude: float = C.ORBIT_ALTITUDE

    # ── 3. Orbit profile ─────────────────────────────────────────────────
    orbit_base_consumption: float = C.ORBIT_BASE_CONSUMPTION
    orbit_stabilization_ticks: int = C.ORBIT_STABILIZATION_TICKS
    longitude_rate: float = C.LONGITUDE_RATE
    latitude_rate: float = C.LATITUDE_RATE

    # ── 4. Return profile ────────────────────────────────────────────────
    return_base_consumption: float = C.RETURN_BASE_CONSUMPTION
    return_altitude_step: float = C.RETURN_ALTITUDE_STEP
    return_velocity_step: float = C.RETURN_VELOCITY_STEP

    # ── 5. Emergency procedure ───────────────────────────────────────────
    emergency_base_consumption: float = C.EMERGENCY_BASE_CONSUMPTION
    emergency_altitude_step: float = C.EMERGENCY_ALTITUDE_STEP
    emergency_velocity_step: float = C.EMERGENCY_VELOCITY_STEP
    emergency_entry_altitude: float = C.EMERGENCY_ENTRY_ALTITUDE
    emergency_entry_velocity: float = C.EMERGENCY_ENTRY_VELOCITY
    passive_decay_altitude: float = C.PASSIVE_DECAY_ALTITUDE

    # ── 6. Safety thresholds / envelope ──────────────────────────────────
    critical_fuel_level: float = C.CRITICAL_FUEL_LEVEL
    altitude_ceiling: float = C.ALTITUDE_CEILING
    altitude_floor: float = C.ALTITUDE_FLOOR
    baseline_altitude: float = C.BASELINE_ALTITUDE
    baseline_velocity: float = C.BASELINE_VELOCITY

    # ── 7. Orbit hold ────────────────────────────────────────────────────
    fault_dwell_seconds: float = C.FAULT_DWELL_SECONDS
    # Simulated time spent holding in orbit before the hold is resolved
    orbit_hold_seconds: float = 0.0
    # Activate the backup system automatically when a fault stalls the orbit
    enable_backup_system: bool = False

    # ── 8. Output ────────────────────────────────────────────────────────
    error_log_path: Optional[str] = None
    telemetry_locale: str = "en"
    verbose: bool = True

    def __post_init__(self):
        if self.tick_seconds <= 0.0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}")
        if self.tick_delay < 0.0:
            raise ValueError(f"tick_delay must be >= 0, got {self.tick_delay}")
        if self.orbit_stabilization_ticks < 1:
            raise ValueError(
                f"orbit_stabilization_ticks must be >= 1, got {self.orbit_stabilization_ticks}"
            )
        steps = {
            'launch_altitude_step': self.launch_altitude_step,
            'return_altitude_step': self.return_altitude_step,
            'emergency_altitude_step': self.emergency_altitude_step,
        }
        for name, value in steps.items():
            if value <= 0.0:
                raise ValueError(f"{name} must be positive, got {value}")
        consumptions = {
            'launch_base_consumption': self.launch_base_consumption,
            'orbit_base_consumption': self.orbit_base_consumption,
            'return_base_consumption': self.return_base_consumption,
            'emergency_base_consumption': self.emergency_base_consumption,
        }
        for name, value in consumptions.items():
            if value < 0.0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.orbit_hold_seconds < 0.0:
            raise ValueError(f"orbit_hold_seconds must be >= 0, got {self.orbit_hold_seconds}")


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(**overrides) -> SimulationConfig:
    """Create a fast config suitable for testing (no pacing, quiet).

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(tick_delay=0.0, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
