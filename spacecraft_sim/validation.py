"""
Spacecraft Mission Simulation - Route Validation and Invariant Checks

This module implements two layers of checks:

Route validation (runs every tick, never raises):
- Latitude clamp to [-90, 90]
- Longitude wrap into (-180, 180]
- Altitude envelope [0, 300] km; a deviation forces re-acquisition of the
  nominal orbit baseline (100 km, 1 km/s; an empty tank cannot speed up)

Invariant checks (raise ValidationError):
- Fuel level within [0, 100] and never regenerating
- Coordinates within their hard ranges
- Non-negative velocity

A ValidationError means the core broke one of its own invariants; mission
failures are expressed through state and fault events instead.
"""

import logging
from typing import NamedTuple, Optional, Tuple

import numpy as np

from . import constants as C
from .physics import FaultEmitter
from .state import SpacecraftState
from .types import FAULT_NAVIGATION_DEVIATION

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when a state invariant check fails."""
    pass


class RouteReport(NamedTuple):
    """Outcome of a route validation pass."""
    deviated: bool  # Altitude left the envelope and was reset
    observed_altitude: float  # Altitude before any correction (km)


def clamp_latitude(latitude: float) -> float:
    """Clamp latitude to [-90, 90] degrees."""
    return float(np.clip(latitude, C.MIN_LATITUDE, C.MAX_LATITUDE))


def wrap_longitude(longitude: float) -> float:
    """
    Wrap longitude into (-180, 180] degrees.

    Values already in range are returned unchanged; -180 maps to 180.
    """
    if -C.MAX_LONGITUDE < longitude <= C.MAX_LONGITUDE:
        return longitude
    return C.MAX_LONGITUDE - ((C.MAX_LONGITUDE - longitude) % C.LONGITUDE_SPAN)


def altitude_in_envelope(altitude: float,
                         floor: float = C.ALTITUDE_FLOOR,
                         ceiling: float = C.ALTITUDE_CEILING) -> bool:
    return floor <= altitude <= ceiling


def validate_route(state: SpacecraftState, emit: Optional[FaultEmitter] = None,
                   floor: float = C.ALTITUDE_FLOOR,
                   ceiling: float = C.ALTITUDE_CEILING,
                   baseline_altitude: float = C.BASELINE_ALTITUDE,
                   baseline_velocity: float = C.BASELINE_VELOCITY) -> RouteReport:
    """
    Normalize coordinates and correct an out-of-envelope altitude.

    Never changes phase or fuel level.

    Args:
        state: Craft state, updated in place
        emit: Optional fault event callback
        floor, ceiling: Altitude envelope (km)
        baseline_altitude, baseline_velocity: Re-acquisition target

    Returns:
        RouteReport with the deviation flag and the pre-correction altitude
    """
    state.latitude = clamp_latitude(state.latitude)
    state.longitude = wrap_longitude(state.longitude)

    observed = state.altitude
    if altitude_in_envelope(observed, floor, ceiling):
        return RouteReport(deviated=False, observed_altitude=observed)

    message = (f"Route deviation detected at {observed:.1f} km; "
               f"re-acquiring {baseline_altitude:.0f} km baseline")
    logger.warning(message)
    state.altitude = baseline_altitude
    if state.fuel_exhausted:
        # No thrust to re-acquire the baseline speed
        state.velocity = min(state.velocity, baseline_velocity)
    else:
        state.velocity = baseline_velocity
    if emit is not None:
        emit(FAULT_NAVIGATION_DEVIATION, message)
    return RouteReport(deviated=True, observed_altitude=observed)


def check_fuel_level(fuel_level: float) -> bool:
    """
    Check that the fuel level is within [0, 100] %.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not 0.0 <= fuel_level <= C.INITIAL_FUEL_LEVEL:
        raise ValidationError(
            f"Fuel level out of range: {fuel_level:.4f}% "
            f"(expected 0 - {C.INITIAL_FUEL_LEVEL:.0f}%)"
        )
    return True


def check_fuel_monotonic(previous: float, current: float,
                         tolerance: float = C.ZERO_TOLERANCE) -> bool:
    """
    Check that fuel has not regenerated between two ticks.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if current > previous + tolerance:
        raise ValidationError(
            f"Fuel regenerated: {previous:.4f}% -> {current:.4f}%"
        )
    return True


def check_coordinates(latitude: float, longitude: float) -> bool:
    """
    Check the hard coordinate invariants.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not C.MIN_LATITUDE <= latitude <= C.MAX_LATITUDE:
        raise ValidationError(f"Latitude out of range: {latitude:.6f} deg")
    if not -C.MAX_LONGITUDE < longitude <= C.MAX_LONGITUDE:
        raise ValidationError(f"Longitude out of range: {longitude:.6f} deg")
    return True


def check_velocity(velocity: float) -> bool:
    """
    Check that velocity is non-negative.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if velocity < 0.0:
        raise ValidationError(f"Negative velocity: {velocity:.6f} km/s")
    return True


def validate_state(state: SpacecraftState, previous_fuel: Optional[float] = None,
                   abort_on_error: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Run all invariant checks on a post-validation state.

    Args:
        state: Current craft state
        previous_fuel: Fuel level at the previous tick, if known
        abort_on_error: If True, re-raise the first failure

    Returns:
        (is_valid, error_message) tuple
    """
    try:
        check_fuel_level(state.fuel_level)
        if previous_fuel is not None:
            check_fuel_monotonic(previous_fuel, state.fuel_level)
        check_coordinates(state.latitude, state.longitude)
        check_velocity(state.velocity)
        return True, None
    except ValidationError as e:
        if abort_on_error:
            raise
        return False, str(e)
