"""
Spacecraft Mission Simulation - Emergency Procedure

Overrides normal phase logic with a forced safe return.

Two outcomes, chosen by remaining fuel:
  - Fuel left:  forced powered descent from the 100 km entry point, one
                10 km step per tick, ending in LANDED
  - Tank empty: no controlled descent is possible; velocity is cut and the
                craft loses 50 km in a one-shot passive decay, holding in a
                degraded posture (never LANDED)

The procedure always runs to one of these outcomes. It must not run
concurrently with the normal phase loop of the same craft.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .config import SimulationConfig, create_default_config
from .physics import FaultEmitter, apply_tick
from .safety import FaultReason
from .state import MissionPhase, SpacecraftState
from .types import FAULT_FUEL_EXHAUSTION_PROTOCOL

logger = logging.getLogger(__name__)


class EmergencyOutcome(Enum):
    LANDED = auto()
    DEGRADED_HOLD = auto()


@dataclass
class EmergencyReport:
    """Result of one emergency procedure run."""
    outcome: EmergencyOutcome
    reason: Optional[FaultReason]
    phase_before: MissionPhase
    start_altitude: float
    final_altitude: float
    steps: int = 0

    @property
    def landed(self) -> bool:
        return self.outcome == EmergencyOutcome.LANDED


class EmergencyController:
    """Computes and flies the forced safe-return trajectory."""

    def __init__(self, config: SimulationConfig = None,
                 emit: Optional[FaultEmitter] = None,
                 on_step: Optional[Callable[[SpacecraftState], None]] = None):
        """
        Args:
            config: Emergency profile (default config if None)
            emit: Fault event callback
            on_step: Called after every descent step (telemetry, pacing)
        """
        self.config = config or create_default_config()
        self.emit = emit
        self.on_step = on_step

    def execute(self, state: SpacecraftState,
                reason: Optional[FaultReason] = None) -> EmergencyReport:
        """
        Run the emergency procedure on the craft.

        Args:
            state: Craft state, updated in place
            reason: Fault that triggered the procedure, if any

        Returns:
            EmergencyReport describing the outcome
        """
        cfg = self.config
        phase_before = state.phase
        start_altitude = state.altitude
        label = reason.name if reason is not None else "MANUAL"
        logger.warning(f"EMERGENCY declared ({label}) in {phase_before.name}: {state}")

        if state.fuel_exhausted:
            state.velocity = 0.0
            state.altitude = max(state.altitude - cfg.passive_decay_altitude, 0.0)
            message = "Fuel exhausted; orbit preservation protocol engaged"
            logger.error(f"{message} (alt {start_altitude:.1f} -> {state.altitude:.1f} km)")
            if self.emit is not None:
                self.emit(FAULT_FUEL_EXHAUSTION_PROTOCOL, message)
            if self.on_step is not None:
                self.on_step(state)
            return EmergencyReport(
                outcome=EmergencyOutcome.DEGRADED_HOLD,
                reason=reason,
                phase_before=phase_before,
                start_altitude=start_altitude,
                final_altitude=state.altitude,
            )

        logger.info("Computing safe return trajectory")
        state.velocity = cfg.emergency_entry_velocity
        state.altitude = cfg.emergency_entry_altitude
        steps = 0
        while state.altitude > 0.0:
            apply_tick(
                state,
                cfg.emergency_base_consumption,
                -min(cfg.emergency_altitude_step, state.altitude),
                -cfg.emergency_velocity_step,
                self.emit,
            )
            steps += 1
            if self.on_step is not None:
                self.on_step(state)

        state.altitude = 0.0
        state.phase = MissionPhase.LANDED
        logger.info(f"Craft landed safely after {steps} emergency descent steps")
        return EmergencyReport(
            outcome=EmergencyOutcome.LANDED,
            reason=reason,
            phase_before=phase_before,
            start_altitude=start_altitude,
            final_altitude=state.altitude,
            steps=steps,
        )
