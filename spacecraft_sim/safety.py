"""
Spacecraft Mission Simulation - Safety Monitor

Inspects the craft every active tick and decides whether an emergency must
be declared. The monitor holds thresholds only; it keeps no per-mission
state, so one instance can be reused across missions.

Fault priority (one escalation per tick):
  1. Critical fuel   (fuel_level <= 10 %)
  2. Altitude breach (altitude > 300 km)
  3. Systems fault   (systems_nominal is False)
"""

import logging
from enum import Enum, auto
from typing import Optional

from . import constants as C
from .state import SpacecraftState
from .types import (
    FAULT_ALTITUDE_CEILING,
    FAULT_FUEL_CRITICAL,
    FAULT_SYSTEMS_NOT_NOMINAL,
)

logger = logging.getLogger(__name__)


class FaultReason(Enum):
    FUEL_CRITICAL = auto()
    ALTITUDE_CEILING = auto()
    SYSTEMS_FAULT = auto()


FAULT_KINDS = {
    FaultReason.FUEL_CRITICAL: FAULT_FUEL_CRITICAL,
    FaultReason.ALTITUDE_CEILING: FAULT_ALTITUDE_CEILING,
    FaultReason.SYSTEMS_FAULT: FAULT_SYSTEMS_NOT_NOMINAL,
}


class SafetyMonitor:
    """Detects unsafe conditions that require the emergency procedure."""

    def __init__(self, critical_fuel_level: float = C.CRITICAL_FUEL_LEVEL,
                 altitude_ceiling: float = C.ALTITUDE_CEILING):
        """
        Args:
            critical_fuel_level: Fuel level (%) at or below which to escalate
            altitude_ceiling: Safe operational ceiling (km)
        """
        self.critical_fuel_level = critical_fuel_level
        self.altitude_ceiling = altitude_ceiling

    def check(self, state: SpacecraftState,
              observed_altitude: Optional[float] = None) -> Optional[FaultReason]:
        """
        Return the highest-priority fault, or None when the craft is safe.

        Args:
            state: Current craft state
            observed_altitude: Altitude seen before route correction this
                tick. A ceiling breach the validator already reset still
                escalates.
        """
        altitude = state.altitude
        if observed_altitude is not None:
            altitude = max(altitude, observed_altitude)

        if state.fuel_level <= self.critical_fuel_level:
            return FaultReason.FUEL_CRITICAL
        if altitude > self.altitude_ceiling:
            return FaultReason.ALTITUDE_CEILING
        if not state.systems_nominal:
            return FaultReason.SYSTEMS_FAULT
        return None

    def describe(self, reason: FaultReason, state: SpacecraftState) -> str:
        """Fault message for the fault log."""
        if reason == FaultReason.FUEL_CRITICAL:
            return (f"Fuel dropped to critical level: {state.fuel_level:.1f}% "
                    f"<= {self.critical_fuel_level:.1f}%")
        if reason == FaultReason.ALTITUDE_CEILING:
            return f"Altitude above safe limit of {self.altitude_ceiling:.0f} km"
        return "Systems not nominal"


def activate_backup_system(state: SpacecraftState) -> bool:
    """
    Bring the backup system online, clearing the systems fault flag.

    This explicit recovery action is the only operation allowed to set
    systems_nominal back to True.
    """
    logger.info("Activating backup system")
    state.systems_nominal = True
    return True
