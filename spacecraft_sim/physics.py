"""
Spacecraft Mission Simulation - Physics Model

Per-tick updates of fuel, altitude, velocity and ground track.

Fuel consumption scales with a kinetic proxy (velocity) and a potential
proxy (altitude):

    consumption = base + velocity * 0.1 + altitude * 0.01

Once the tank is empty the craft cannot climb or accelerate: positive
altitude and velocity deltas are dropped for the rest of the mission.
"""

import logging
from typing import Callable, Optional

from . import constants as C
from .state import SpacecraftState
from .types import FAULT_FUEL_EXHAUSTED

logger = logging.getLogger(__name__)

# emit(kind, message) -> None
FaultEmitter = Callable[[str, str], None]


def compute_consumption(state: SpacecraftState, base_consumption: float) -> float:
    """
    Fuel required for one tick at the current velocity and altitude.

    Args:
        state: Current craft state
        base_consumption: Phase-specific base burn (% per tick)

    Returns:
        Fuel consumption (%) for this tick
    """
    return (base_consumption
            + state.velocity * C.VELOCITY_CONSUMPTION_FACTOR
            + state.altitude * C.ALTITUDE_CONSUMPTION_FACTOR)


def consume_fuel(state: SpacecraftState, base_consumption: float,
                 emit: Optional[FaultEmitter] = None) -> bool:
    """
    Burn one tick's worth of fuel.

    If the tank cannot cover the consumption, the fuel level is set to zero
    and the systems fault flag is raised.

    Returns:
        True if this tick exhausted the fuel.
    """
    if state.fuel_exhausted:
        return False

    consumption = compute_consumption(state, base_consumption)
    if state.fuel_level > consumption:
        state.fuel_level -= consumption
        return False

    state.fuel_level = 0.0
    state.systems_nominal = False
    message = "Fuel exhausted at critical level"
    logger.error(f"{message} (needed {consumption:.2f}%, alt={state.altitude:.1f}km)")
    if emit is not None:
        emit(FAULT_FUEL_EXHAUSTED, message)
    return True


def apply_tick(state: SpacecraftState, base_consumption: float,
               altitude_delta: float, velocity_delta: float,
               emit: Optional[FaultEmitter] = None) -> bool:
    """
    Apply one physics tick: consume fuel, then move the craft.

    Args:
        state: Craft state, updated in place
        base_consumption: Phase-specific base burn (% per tick)
        altitude_delta: Altitude change for the tick (km)
        velocity_delta: Velocity change for the tick (km/s)
        emit: Optional fault event callback

    Returns:
        True if this tick exhausted the fuel.
    """
    exhausted = consume_fuel(state, base_consumption, emit)

    if state.fuel_exhausted:
        # No thrust: climbing or accelerating is impossible
        altitude_delta = min(altitude_delta, 0.0)
        velocity_delta = min(velocity_delta, 0.0)

    state.altitude += altitude_delta
    state.velocity = max(state.velocity + velocity_delta, 0.0)
    return exhausted


def update_coordinates(state: SpacecraftState,
                       longitude_rate: float = C.LONGITUDE_RATE,
                       latitude_rate: float = C.LATITUDE_RATE):
    """Advance the ground track proportionally to velocity.

    Range normalization is left to the route validator.
    """
    state.longitude += state.velocity * longitude_rate
    state.latitude += state.velocity * latitude_rate
