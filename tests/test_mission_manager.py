"""
Unit tests for the mission state machine.
"""

import pytest
from spacecraft_sim.clock import SimulationClock
from spacecraft_sim.commands import ReturnDecision, ScriptedCommandSource
from spacecraft_sim.config import create_test_config
from spacecraft_sim.emergency import EmergencyOutcome
from spacecraft_sim.mission_manager import MissionStateError, MissionStateMachine, OrbitHoldOutcome
from spacecraft_sim.safety import FaultReason
from spacecraft_sim.state import MissionPhase, SpacecraftState
from spacecraft_sim.telemetry import FaultLog, TelemetryLog
from spacecraft_sim import types


def make_machine(state=None, tokens=(), **overrides):
    return MissionStateMachine(
        state=state,
        config=create_test_config(**overrides),
        telemetry=TelemetryLog(),
        faults=FaultLog(),
        commands=ScriptedCommandSource(tokens),
        clock=SimulationClock(1.0, epoch=0.0),
    )


def orbit_state(**kwargs):
    defaults = dict(phase=MissionPhase.ORBIT, fuel_level=71.0, altitude=100.0, velocity=10.0)
    defaults.update(kwargs)
    return SpacecraftState(**defaults)


class TestLaunch:
    def test_nominal_launch_reaches_orbit(self):
        m = make_machine()
        assert m.start() == MissionPhase.ORBIT
        assert m.state.altitude == pytest.approx(100.0)
        assert m.state.velocity == pytest.approx(10.0)
        assert m.state.fuel_level == pytest.approx(71.0)
        assert m.clock.ticks == 10
        assert len(m.telemetry) == 10
        assert set(m.telemetry.phase) == {'LAUNCH'}

    def test_start_requires_idle(self):
        m = make_machine(state=orbit_state())
        with pytest.raises(MissionStateError):
            m.start()

    def test_launch_requires_launch_phase(self):
        with pytest.raises(MissionStateError):
            make_machine().launch()

    def test_immediate_exhaustion_aborts_launch(self):
        m = make_machine(state=SpacecraftState(fuel_level=1.0))
        assert m.start() == MissionPhase.IDLE
        assert m.state.fuel_level == 0.0
        assert m.state.altitude == 0.0
        assert m.degraded
        assert m.emergency_reports[0].outcome == EmergencyOutcome.DEGRADED_HOLD
        assert m.faults.kinds() == [
            types.FAULT_FUEL_EXHAUSTED,
            types.FAULT_FUEL_CRITICAL,
            types.FAULT_FUEL_EXHAUSTION_PROTOCOL,
        ]

    def test_critical_fuel_during_launch_lands(self):
        m = make_machine(state=SpacecraftState(fuel_level=15.0))
        assert m.start() == MissionPhase.LANDED
        report = m.emergency_reports[0]
        assert report.reason == FaultReason.FUEL_CRITICAL
        assert report.phase_before == MissionPhase.LAUNCH
        assert report.start_altitude == pytest.approx(30.0)
        assert m.mission_successful

    def test_phase_history(self):
        m = make_machine()
        m.start()
        phases = [phase for _, phase in m.phase_history]
        assert phases == [MissionPhase.IDLE, MissionPhase.LAUNCH, MissionPhase.ORBIT]
        assert m.phase_history[-1][0] == 10.0


class TestOrbit:
    def test_stabilization_moves_ground_track(self):
        m = make_machine(state=orbit_state(latitude=37.1054, longitude=28.3271))
        assert m.stabilize_orbit() is True
        assert m.orbit_ticks == 5
        assert m.state.fuel_level == pytest.approx(56.0)
        assert m.state.altitude == pytest.approx(100.0)
        assert m.state.longitude == pytest.approx(28.8271)
        assert m.state.latitude == pytest.approx(37.3554)

    def test_ground_track_wraps_past_antimeridian(self):
        m = make_machine(state=orbit_state(longitude=179.8))
        m.stabilize_orbit()
        assert m.state.longitude == pytest.approx(-179.7)

    def test_systems_fault_halts_stabilization(self):
        m = make_machine(state=orbit_state(systems_nominal=False))
        assert m.stabilize_orbit() is False
        assert m.orbit_ticks == 0
        assert m.state.fault_time == 0.0
        assert m.state.phase == MissionPhase.ORBIT
        assert m.faults.kinds() == [types.FAULT_ORBIT_STABILIZATION]

    def test_hold_without_command_stays_in_orbit(self):
        m = make_machine(state=orbit_state())
        assert m.resolve_orbit_hold() == OrbitHoldOutcome.NO_COMMAND
        assert m.phase == MissionPhase.ORBIT

    @pytest.mark.parametrize("tokens, outcome", [
        (["x"], OrbitHoldOutcome.INVALID_COMMAND),
        (["r", "n"], OrbitHoldOutcome.CANCELLED),
    ])
    def test_hold_rejected_commands(self, tokens, outcome):
        m = make_machine(state=orbit_state(), tokens=tokens)
        assert m.resolve_orbit_hold() == outcome
        assert m.phase == MissionPhase.ORBIT
        assert m.faults.kinds() == []

    def test_confirmed_return(self):
        m = make_machine(state=orbit_state(), tokens=["r", "y"])
        assert m.resolve_orbit_hold() == OrbitHoldOutcome.RETURNED
        assert m.phase == MissionPhase.LANDED

    def test_fault_dwell_escalates(self):
        m = make_machine(state=orbit_state(systems_nominal=False), tokens=["r", "y"])
        m.stabilize_orbit()
        assert m.resolve_orbit_hold(1800.0) == OrbitHoldOutcome.ESCALATED
        assert m.phase == MissionPhase.LANDED
        assert types.FAULT_ESCALATION in m.faults.kinds()
        assert m.emergency_reports[0].reason == FaultReason.SYSTEMS_FAULT
        # Commands are never read once the hold escalates
        assert m.commands.prompts == []

    def test_fault_dwell_not_expired(self):
        m = make_machine(state=orbit_state(systems_nominal=False))
        m.stabilize_orbit()
        assert m.resolve_orbit_hold(1799.0) == OrbitHoldOutcome.NO_COMMAND
        assert m.phase == MissionPhase.ORBIT
        assert m.state.fault_time == 0.0

    def test_backup_system_recovers_then_returns(self):
        m = make_machine(state=orbit_state(systems_nominal=False), tokens=["r", "y"],
                         enable_backup_system=True)
        m.stabilize_orbit()
        assert m.resolve_orbit_hold() == OrbitHoldOutcome.RETURNED
        assert m.backup_activated
        assert m.state.fault_time is None
        assert m.emergency_reports == []
        assert m.phase == MissionPhase.LANDED

    def test_return_with_fault_triggers_emergency(self):
        m = make_machine(state=orbit_state(systems_nominal=False), tokens=["r", "y"])
        m.stabilize_orbit()
        assert m.resolve_orbit_hold() == OrbitHoldOutcome.RETURNED
        assert m.phase == MissionPhase.LANDED
        assert len(m.emergency_reports) == 1
        assert m.emergency_reports[0].phase_before == MissionPhase.RETURN

    def test_degraded_orbit_hold(self):
        m = make_machine(state=orbit_state(fuel_level=0.5), tokens=["r", "y"])
        assert m.stabilize_orbit() is False
        assert m.orbit_ticks == 1
        assert m.state.altitude == pytest.approx(50.0)
        assert m.resolve_orbit_hold() == OrbitHoldOutcome.DEGRADED_HOLD
        assert m.phase == MissionPhase.ORBIT
        assert m.commands.prompts == []


class TestReturn:
    def test_nominal_return(self):
        m = make_machine(state=orbit_state(fuel_level=56.0))
        assert m.return_to_earth() == MissionPhase.LANDED
        assert m.clock.ticks == 10
        assert m.state.altitude == 0.0
        assert m.state.velocity == pytest.approx(5.0)
        assert m.state.fuel_level == pytest.approx(27.75)
        assert m.telemetry.phase == ['RETURN'] * 10

    def test_return_from_partial_altitude(self):
        m = make_machine(state=orbit_state(altitude=95.0))
        m.return_to_earth()
        assert m.clock.ticks == 10
        assert m.state.altitude == 0.0
        assert min(m.telemetry.altitude) == 0.0

    def test_return_requires_orbit(self):
        with pytest.raises(MissionStateError):
            make_machine().return_to_earth()

    def test_ceiling_breach_on_return(self):
        m = make_machine(state=orbit_state(altitude=350.0, velocity=1.0, fuel_level=80.0))
        assert m.return_to_earth() == MissionPhase.LANDED
        kinds = m.faults.kinds()
        assert types.FAULT_NAVIGATION_DEVIATION in kinds
        assert types.FAULT_ALTITUDE_CEILING in kinds
        assert m.emergency_reports[0].reason == FaultReason.ALTITUDE_CEILING

    def test_no_ticks_after_landing(self):
        m = make_machine(state=orbit_state())
        m.return_to_earth()
        with pytest.raises(MissionStateError):
            m._tick(1.0, 0.0, 0.0)
        with pytest.raises(MissionStateError):
            m.return_to_earth()


class TestRun:
    def test_full_run_with_return_command(self):
        m = make_machine(tokens=["r", "y"])
        assert m.run() == MissionPhase.LANDED
        assert m.clock.ticks == 25
        assert m.clock.now == 25.0
        assert m.faults.kinds() == []
        assert m.hold_outcome == OrbitHoldOutcome.RETURNED

    def test_full_run_without_command(self):
        m = make_machine()
        assert m.run() == MissionPhase.ORBIT
        assert m.clock.ticks == 15
        assert m.hold_outcome == OrbitHoldOutcome.NO_COMMAND
        assert not m.mission_successful

    def test_hold_seconds_advance_clock(self):
        m = make_machine(tokens=["r", "y"])
        m.run(hold_seconds=600.0)
        assert m.clock.now == pytest.approx(625.0)
        assert m.clock.ticks == 25

    def test_fault_timestamps_use_clock_epoch(self):
        clock = SimulationClock(1.0, epoch=1000.0)
        m = MissionStateMachine(state=SpacecraftState(fuel_level=1.0),
                                config=create_test_config(), faults=FaultLog(), clock=clock)
        m.run()
        # Exhaustion is detected during the burn, before the clock advances
        assert m.faults.events[0]['timestamp'] == pytest.approx(1000.0)
        assert m.faults.events[1]['timestamp'] == pytest.approx(1001.0)


class TestRequestReturn:
    def test_request_return_does_not_fly(self):
        m = make_machine(state=orbit_state(), tokens=["R", "Y"])
        assert m.request_return() == ReturnDecision.ACCEPTED
        assert m.phase == MissionPhase.ORBIT
        assert m.clock.ticks == 0

    def test_request_return_requires_orbit(self):
        with pytest.raises(MissionStateError):
            make_machine(tokens=["r", "y"]).request_return()


def test_empty_tank_ceiling_reset_keeps_velocity():
    m = make_machine(state=orbit_state(altitude=350.0, velocity=0.0, fuel_level=0.0,
                                       systems_nominal=False))
    m.return_to_earth()
    assert m.telemetry.velocity == [0.0, 0.0]
    assert m.telemetry.altitude == [pytest.approx(100.0), pytest.approx(50.0)]
    assert m.degraded
