"""
Spacecraft Mission Simulation - Craft State

This module defines the single state aggregate for the craft. Exactly one
instance exists per mission; it is owned by the mission state machine and is
only mutated through the physics, validation, safety and emergency
operations. No duplicated state is allowed anywhere.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from . import constants as C


class MissionPhase(Enum):
    IDLE = auto()
    LAUNCH = auto()
    ORBIT = auto()
    RETURN = auto()
    LANDED = auto()     # Terminal


ACTIVE_PHASES = frozenset({MissionPhase.LAUNCH, MissionPhase.ORBIT, MissionPhase.RETURN})


@dataclass
class SpacecraftState:
    """
    State of the craft at the current tick.

    Attributes:
        phase: Current discrete mission phase
        fuel_level: Remaining fuel (% of a full tank, 0-100)
        altitude: Altitude above the surface (km)
        velocity: Speed (km/s), never negative
        systems_nominal: False while a systems fault is unresolved
        latitude: Latitude (deg), kept within [-90, 90]
        longitude: Longitude (deg), kept within (-180, 180]
        fault_time: Mission-clock time (s) at which orbit stabilization
            failed on a systems fault, or None
    """

    phase: MissionPhase = MissionPhase.IDLE
    fuel_level: float = C.INITIAL_FUEL_LEVEL
    altitude: float = C.INITIAL_ALTITUDE
    velocity: float = C.INITIAL_VELOCITY
    systems_nominal: bool = True
    latitude: float = C.LAUNCH_LATITUDE
    longitude: float = C.LAUNCH_LONGITUDE
    fault_time: Optional[float] = None

    def __post_init__(self):
        """Coerce numeric fields so integer literals behave like the model."""
        for attr in ['fuel_level', 'altitude', 'velocity', 'latitude', 'longitude']:
            setattr(self, attr, float(getattr(self, attr)))
        self.systems_nominal = bool(self.systems_nominal)

    def copy(self) -> 'SpacecraftState':
        """Create an independent copy of the state."""
        return replace(self)

    @property
    def fuel_exhausted(self) -> bool:
        return self.fuel_level <= 0.0

    @property
    def landed(self) -> bool:
        return self.phase == MissionPhase.LANDED

    def __str__(self) -> str:
        return (
            f"SpacecraftState(phase={self.phase.name}, "
            f"alt={self.altitude:.1f}km, "
            f"v={self.velocity:.2f}km/s, "
            f"fuel={self.fuel_level:.1f}%, "
            f"lat={self.latitude:.4f}, lon={self.longitude:.4f}, "
            f"nominal={self.systems_nominal})"
        )


def create_initial_state() -> SpacecraftState:
    """
    Create the launch-pad state.

    Returns:
        SpacecraftState in IDLE with a full tank at the launch site.
    """
    return SpacecraftState(
        phase=MissionPhase.IDLE,
        fuel_level=C.INITIAL_FUEL_LEVEL,
        altitude=C.INITIAL_ALTITUDE,
        velocity=C.INITIAL_VELOCITY,
        systems_nominal=True,
        latitude=C.LAUNCH_LATITUDE,
        longitude=C.LAUNCH_LONGITUDE,
        fault_time=None,
    )
