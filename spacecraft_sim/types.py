"""
Spacecraft Mission Simulation - Type Definitions

This module provides TypedDict definitions for the structured records the
core hands to its external collaborators.
"""

from typing import TypedDict

from .state import MissionPhase


class TelemetrySnapshot(TypedDict):
    """One per-tick telemetry record."""
    time: float  # Mission-clock time (s)
    phase: MissionPhase  # Structured phase; labels are a sink concern
    latitude: float  # deg
    longitude: float  # deg
    altitude: float  # km
    velocity: float  # km/s
    fuel_level: float  # %


class FaultEvent(TypedDict):
    """One append-only fault record."""
    timestamp: float  # Epoch seconds (mission clock epoch + elapsed)
    kind: str  # One of the FAULT_* kinds below
    message: str


FAULT_FUEL_EXHAUSTED = "fuel_exhausted"
FAULT_FUEL_CRITICAL = "fuel_critical"
FAULT_ALTITUDE_CEILING = "altitude_ceiling"
FAULT_SYSTEMS_NOT_NOMINAL = "systems_not_nominal"
FAULT_NAVIGATION_DEVIATION = "navigation_deviation"
FAULT_FUEL_EXHAUSTION_PROTOCOL = "fuel_exhaustion_protocol"
FAULT_ORBIT_STABILIZATION = "orbit_stabilization_failed"
FAULT_ESCALATION = "fault_escalation"
