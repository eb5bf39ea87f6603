"""
Spacecraft Mission Manager

This module handles the high-level state machine for the mission.
It owns the single craft state, sequences every tick and handles the
transition logic between the discrete mission phases.

Per-tick order (every active phase):
  fuel burn + physics -> route validation -> telemetry -> safety check
  -> emergency procedure on a fault (same tick, before any phase logic)

Transitions:
  - IDLE -> LAUNCH:    mission start
  - LAUNCH -> ORBIT:   altitude >= 100 km with fuel remaining
  - LAUNCH -> IDLE:    fuel exhausted before orbit (launch abort)
  - ORBIT hold:        automatic escalation after a 30 min systems fault,
                       operator return command, or remain in orbit
  - ORBIT -> RETURN:   confirmed operator return command
  - RETURN -> LANDED:  altitude reaches 0
  - any -> LANDED:     emergency forced descent
"""

from enum import Enum, auto
import logging
from typing import List, Optional, Tuple

from .clock import SimulationClock, create_pacer
from .commands import CommandSource, ReturnDecision, ScriptedCommandSource, request_return_confirmation
from .config import SimulationConfig, create_default_config
from .emergency import EmergencyController, EmergencyReport
from .physics import apply_tick, update_coordinates
from .safety import FAULT_KINDS, FaultReason, SafetyMonitor, activate_backup_system
from .state import ACTIVE_PHASES, MissionPhase, SpacecraftState, create_initial_state
from .telemetry import FaultLog, make_snapshot
from .types import FAULT_ESCALATION, FAULT_ORBIT_STABILIZATION, FaultEvent
from .validation import validate_route, validate_state

logger = logging.getLogger(__name__)


class MissionStateError(RuntimeError):
    """Raised when an operation is requested in a phase that forbids it."""
    pass


class OrbitHoldOutcome(Enum):
    ESCALATED = auto()          # Fault dwell expired, emergency procedure ran
    RETURNED = auto()           # Confirmed return command, return flown
    NO_COMMAND = auto()         # No operator response, craft stays in orbit
    INVALID_COMMAND = auto()    # Unrecognized command, craft stays in orbit
    CANCELLED = auto()          # Confirmation declined, craft stays in orbit
    DEGRADED_HOLD = auto()      # Emergency left the craft unpowered in orbit


_DECISION_OUTCOMES = {
    ReturnDecision.NO_COMMAND: OrbitHoldOutcome.NO_COMMAND,
    ReturnDecision.INVALID_COMMAND: OrbitHoldOutcome.INVALID_COMMAND,
    ReturnDecision.CANCELLED: OrbitHoldOutcome.CANCELLED,
}


class MissionStateMachine:
    """
    Drives one craft through its mission, tick by tick.
    """

    def __init__(self, state: SpacecraftState = None, config: SimulationConfig = None,
                 telemetry=None, faults: FaultLog = None,
                 commands: CommandSource = None, clock: SimulationClock = None,
                 pacer=None, monitor: SafetyMonitor = None):
        """
        Args:
            state: Starting craft state (launch-pad state if None)
            config: SimulationConfig (default created if None)
            telemetry: Sink with a publish(snapshot) method, or None
            faults: Fault sink with a record(event) method
            commands: Operator command source for the orbit hold
            clock: Mission clock (fresh clock if None)
            pacer: Pacing strategy with a wait() method
            monitor: Safety monitor (thresholds from config if None)
        """
        self.config = config or create_default_config()
        cfg = self.config
        self.state = state if state is not None else create_initial_state()
        self.telemetry = telemetry
        self.faults = faults if faults is not None else FaultLog(cfg.error_log_path)
        self.commands = commands if commands is not None else ScriptedCommandSource()
        self.clock = clock or SimulationClock(cfg.tick_seconds)
        self.pacer = pacer or create_pacer(cfg.tick_delay)
        self.monitor = monitor or SafetyMonitor(cfg.critical_fuel_level, cfg.altitude_ceiling)
        self.emergency = EmergencyController(cfg, emit=self._emit, on_step=self._emergency_step)

        self.emergency_reports: List[EmergencyReport] = []
        self.hold_outcome: Optional[OrbitHoldOutcome] = None
        self.backup_activated = False
        self.orbit_ticks = 0
        self.phase_history: List[Tuple[float, MissionPhase]] = [(self.clock.now, self.state.phase)]

    # ------------------------------------------------------------------
    # Collaborator plumbing
    # ------------------------------------------------------------------

    def _emit(self, kind: str, message: str):
        self.faults.record(FaultEvent(
            timestamp=self.clock.timestamp(),
            kind=kind,
            message=message,
        ))

    def _publish(self):
        if self.telemetry is not None:
            self.telemetry.publish(make_snapshot(self.state, self.clock.now))

    def _emergency_step(self, state: SpacecraftState):
        self.clock.tick()
        self._publish()
        self.pacer.wait()

    def _set_phase(self, phase: MissionPhase):
        previous = self.state.phase
        self.state.phase = phase
        self.phase_history.append((self.clock.now, phase))
        logger.info(f"Phase {previous.name} -> {phase.name} at t={self.clock.now:.0f}s, "
                    f"alt={self.state.altitude:.1f}km, fuel={self.state.fuel_level:.1f}%")

    def _require_phase(self, phase: MissionPhase, action: str):
        if self.state.phase != phase:
            raise MissionStateError(
                f"Cannot {action} in phase {self.state.phase.name} "
                f"(requires {phase.name})"
            )

    # ------------------------------------------------------------------
    # Tick sequencing
    # ------------------------------------------------------------------

    def _tick(self, base_consumption: float, altitude_delta: float, velocity_delta: float,
              move_ground_track: bool = False) -> Optional[EmergencyReport]:
        """
        Run one synchronous tick of the active phase.

        Returns:
            The EmergencyReport if the safety monitor fired, else None.
        """
        if self.state.phase not in ACTIVE_PHASES:
            raise MissionStateError(f"No ticks are allowed in phase {self.state.phase.name}")

        cfg = self.config
        state = self.state
        previous_fuel = state.fuel_level

        apply_tick(state, base_consumption, altitude_delta, velocity_delta, self._emit)
        if move_ground_track:
            update_coordinates(state, cfg.longitude_rate, cfg.latitude_rate)
        route = validate_route(state, self._emit, cfg.altitude_floor, cfg.altitude_ceiling,
                               cfg.baseline_altitude, cfg.baseline_velocity)
        validate_state(state, previous_fuel)

        self.clock.tick()
        self._publish()
        self.pacer.wait()
        logger.debug(f"t={self.clock.now:.0f}s {state}")

        reason = self.monitor.check(state, route.observed_altitude)
        if reason is None:
            return None
        return self._declare_emergency(reason)

    def _declare_emergency(self, reason: FaultReason) -> EmergencyReport:
        self._emit(FAULT_KINDS[reason], self.monitor.describe(reason, self.state))
        report = self.emergency.execute(self.state, reason)
        self.emergency_reports.append(report)
        if report.landed:
            self.phase_history.append((self.clock.now, MissionPhase.LANDED))
        return report

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def start(self) -> MissionPhase:
        """IDLE -> LAUNCH, then fly the launch phase."""
        self._require_phase(MissionPhase.IDLE, "start the mission")
        self._set_phase(MissionPhase.LAUNCH)
        return self.launch()

    def launch(self) -> MissionPhase:
        """
        Climb until orbit altitude is reached or the fuel runs out.

        Returns:
            ORBIT on success, IDLE on a launch abort, LANDED if an emergency
            brought the craft down.
        """
        self._require_phase(MissionPhase.LAUNCH, "launch")
        cfg = self.config
        state = self.state
        logger.info("Launch sequence started")

        while state.altitude < cfg.orbit_altitude and state.fuel_level > 0.0:
            report = self._tick(cfg.launch_base_consumption,
                                cfg.launch_altitude_step,
                                cfg.launch_velocity_step)
            if report is not None:
                break

        if state.landed:
            return state.phase
        if state.fuel_level > 0.0 and state.altitude >= cfg.orbit_altitude:
            logger.info(f"Orbit reached at {state.altitude:.1f} km")
            self._set_phase(MissionPhase.ORBIT)
        else:
            logger.error("Fuel exhausted; orbit could not be reached")
            self._set_phase(MissionPhase.IDLE)
        return state.phase

    def stabilize_orbit(self) -> bool:
        """
        Run the orbit stabilization ticks.

        A systems fault halts the loop and records fault_time; the craft
        stays in ORBIT awaiting escalation or an operator command.

        Returns:
            True if every stabilization tick completed.
        """
        self._require_phase(MissionPhase.ORBIT, "stabilize the orbit")
        cfg = self.config
        state = self.state
        logger.info("Stabilizing orbit")

        for _ in range(cfg.orbit_stabilization_ticks):
            if not state.systems_nominal:
                state.fault_time = self.clock.now
                self._emit(FAULT_ORBIT_STABILIZATION,
                           "Systems fault; orbit stabilization failed")
                return False
            report = self._tick(cfg.orbit_base_consumption, 0.0, 0.0, move_ground_track=True)
            self.orbit_ticks += 1
            if report is not None:
                return False

        logger.info("Orbit stabilization complete; awaiting return command")
        return True

    def resolve_orbit_hold(self, wait_seconds: float = None) -> OrbitHoldOutcome:
        """
        Resolve the post-stabilization hold.

        The mission clock first advances by the hold time. Then, in order:
        a systems fault older than the dwell period escalates to the
        emergency procedure; otherwise (after an optional backup activation)
        the operator is asked for the two-step return command.
        """
        self._require_phase(MissionPhase.ORBIT, "hold in orbit")
        cfg = self.config
        state = self.state
        if wait_seconds is None:
            wait_seconds = cfg.orbit_hold_seconds
        if wait_seconds:
            self.clock.advance(wait_seconds)

        if self.degraded:
            self.hold_outcome = OrbitHoldOutcome.DEGRADED_HOLD
            return self.hold_outcome

        if not state.systems_nominal and state.fault_time is not None:
            dwell = self.clock.elapsed_since(state.fault_time)
            if dwell >= cfg.fault_dwell_seconds:
                self._emit(FAULT_ESCALATION,
                           f"Systems fault persisted for {dwell:.0f} s; escalating to emergency")
                report = self.emergency.execute(state, FaultReason.SYSTEMS_FAULT)
                self.emergency_reports.append(report)
                if report.landed:
                    self.phase_history.append((self.clock.now, MissionPhase.LANDED))
                self.hold_outcome = OrbitHoldOutcome.ESCALATED
                return self.hold_outcome
            if cfg.enable_backup_system:
                self.backup_activated = activate_backup_system(state)
                state.fault_time = None

        decision = self.request_return()
        if decision == ReturnDecision.ACCEPTED:
            self.return_to_earth()
            self.hold_outcome = OrbitHoldOutcome.RETURNED
        else:
            self.hold_outcome = _DECISION_OUTCOMES[decision]
        return self.hold_outcome

    def request_return(self) -> ReturnDecision:
        """Ask the operator for the two-step return command."""
        self._require_phase(MissionPhase.ORBIT, "request a return")
        decision = request_return_confirmation(self.commands)
        logger.info(f"Return request: {decision.name}")
        return decision

    def return_to_earth(self) -> MissionPhase:
        """
        ORBIT -> RETURN, then descend until touchdown.

        Returns:
            LANDED on touchdown, or the current phase if an emergency left
            the craft in a degraded hold.
        """
        self._require_phase(MissionPhase.ORBIT, "return to Earth")
        cfg = self.config
        state = self.state
        self._set_phase(MissionPhase.RETURN)

        while state.altitude > 0.0:
            report = self._tick(cfg.return_base_consumption,
                                -min(cfg.return_altitude_step, state.altitude),
                                -cfg.return_velocity_step)
            if report is not None:
                return state.phase

        self._set_phase(MissionPhase.LANDED)
        logger.info(f"Craft landed safely. Final coordinates: "
                    f"lat={state.latitude:.4f}, lon={state.longitude:.4f}")
        return state.phase

    def run(self, hold_seconds: float = None) -> MissionPhase:
        """Fly the complete mission: launch, orbit stabilization, hold."""
        self.start()
        if self.state.phase == MissionPhase.ORBIT:
            self.stabilize_orbit()
        if self.state.phase == MissionPhase.ORBIT:
            self.resolve_orbit_hold(hold_seconds)
        return self.state.phase

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def phase(self) -> MissionPhase:
        return self.state.phase

    @property
    def degraded(self) -> bool:
        """True when an emergency left the craft unpowered and not landed."""
        return any(not r.landed for r in self.emergency_reports) and not self.state.landed

    @property
    def mission_successful(self) -> bool:
        return self.state.phase == MissionPhase.LANDED
