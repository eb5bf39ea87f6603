"""
Spacecraft Mission Simulation - Main Entry Point

This module wires the state machine to its collaborators and runs a
complete mission:
- Telemetry log (always) plus optional console output
- Append-only fault log
- Operator command source for the orbit hold
- Mission result reporting (success iff the craft landed)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .clock import SimulationClock
from .commands import CommandSource, ScriptedCommandSource
from .config import SimulationConfig, create_default_config
from .emergency import EmergencyReport
from .mission_manager import MissionStateMachine, OrbitHoldOutcome
from .state import MissionPhase, SpacecraftState
from .telemetry import ConsoleTelemetry, FaultLog, TelemetryBus, TelemetryLog
from .types import FaultEvent

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class MissionResult:
    """Outcome of one complete mission run."""
    final_state: SpacecraftState
    log: TelemetryLog
    faults: List[FaultEvent]
    reason: str
    hold_outcome: Optional[OrbitHoldOutcome] = None
    emergency_reports: List[EmergencyReport] = field(default_factory=list)
    phase_history: List[Tuple[float, MissionPhase]] = field(default_factory=list)
    mission_time: float = 0.0
    ticks: int = 0

    @property
    def success(self) -> bool:
        return self.final_state.phase == MissionPhase.LANDED


def describe_outcome(machine: MissionStateMachine) -> str:
    """Human-readable termination reason for a finished mission."""
    state = machine.state
    if state.phase == MissionPhase.LANDED:
        if machine.emergency_reports:
            return "MISSION COMPLETE - Landed via emergency descent"
        return "MISSION COMPLETE - Landed"
    if state.phase == MissionPhase.IDLE:
        return "MISSION FAILED - Launch aborted, orbit not reached"
    if machine.degraded:
        return f"MISSION FAILED - Degraded hold in {state.phase.name} (fuel exhausted)"
    if machine.hold_outcome is not None:
        return f"MISSION FAILED - Craft remains in orbit ({machine.hold_outcome.name})"
    return f"MISSION FAILED - Mission ended in {state.phase.name}"


def run_mission(initial_state: Optional[SpacecraftState] = None,
                config: SimulationConfig = None,
                commands: CommandSource = None,
                verbose: bool = None,
                hold_seconds: float = None,
                clock: SimulationClock = None) -> MissionResult:
    """
    Run the complete mission simulation.

    Args:
        initial_state: Optional starting state. If None, starts on the pad.
        config: SimulationConfig instance. If None a default is created.
        commands: Operator command source. If None, no command ever arrives
            and the craft stays in orbit after stabilization.
        verbose: Print telemetry lines. Overrides config.verbose if given.
        hold_seconds: Simulated orbit hold before the hold is resolved.
            Overrides config.orbit_hold_seconds if given.
        clock: Mission clock (fresh clock if None)

    Returns:
        MissionResult with the final state, telemetry and fault records
    """
    if config is None:
        config = create_default_config()
    if verbose is None:
        verbose = config.verbose
    if commands is None:
        commands = ScriptedCommandSource()

    log = TelemetryLog()
    bus = TelemetryBus(log)
    if verbose:
        bus.attach(ConsoleTelemetry(locale=config.telemetry_locale))
    faults = FaultLog(config.error_log_path)

    machine = MissionStateMachine(
        state=initial_state.copy() if initial_state is not None else None,
        config=config,
        telemetry=bus,
        faults=faults,
        commands=commands,
        clock=clock,
    )

    logger.info(f"Starting mission: tick={config.tick_seconds}s, pacing={config.tick_delay}s")
    logger.debug(f"Initial state: {machine.state}")
    start_time = time.time()

    machine.run(hold_seconds)

    elapsed = time.time() - start_time
    reason = describe_outcome(machine)
    if machine.mission_successful:
        logger.info(reason)
    else:
        logger.error(reason)
    logger.info(f"Mission finished: {machine.clock.ticks} ticks, "
                f"t={machine.clock.now:.0f}s simulated, {elapsed:.2f}s wall time")

    return MissionResult(
        final_state=machine.state,
        log=log,
        faults=list(faults.events),
        reason=reason,
        hold_outcome=machine.hold_outcome,
        emergency_reports=list(machine.emergency_reports),
        phase_history=list(machine.phase_history),
        mission_time=machine.clock.now,
        ticks=machine.clock.ticks,
    )


if __name__ == "__main__":
    run_mission()
