import pytest
from spacecraft_sim import physics
from spacecraft_sim.state import MissionPhase, SpacecraftState
from spacecraft_sim.types import FAULT_FUEL_EXHAUSTED


@pytest.fixture
def orbit_state():
    return SpacecraftState(phase=MissionPhase.ORBIT, fuel_level=71.0,
                           altitude=100.0, velocity=10.0)


@pytest.fixture
def events():
    recorded = []
    def emit(kind, message):
        recorded.append((kind, message))
    emit.recorded = recorded
    return emit


def test_compute_consumption_scales_with_velocity_and_altitude(orbit_state):
    # 1.0 + 10 * 0.1 + 100 * 0.01
    assert physics.compute_consumption(orbit_state, 1.0) == pytest.approx(3.0)


def test_compute_consumption_on_pad():
    assert physics.compute_consumption(SpacecraftState(), 2.0) == pytest.approx(2.0)


def test_consume_fuel_subtracts(orbit_state):
    exhausted = physics.consume_fuel(orbit_state, 1.0)
    assert exhausted is False
    assert orbit_state.fuel_level == pytest.approx(68.0)
    assert orbit_state.systems_nominal is True


def test_consume_fuel_exhaustion_raises_systems_fault(events):
    s = SpacecraftState(fuel_level=1.5, altitude=0.0, velocity=0.0)
    exhausted = physics.consume_fuel(s, 2.0, events)
    assert exhausted is True
    assert s.fuel_level == 0.0
    assert s.systems_nominal is False
    assert [kind for kind, _ in events.recorded] == [FAULT_FUEL_EXHAUSTED]


def test_consume_fuel_exact_consumption_counts_as_exhaustion():
    s = SpacecraftState(fuel_level=2.0)
    assert physics.consume_fuel(s, 2.0) is True
    assert s.fuel_level == 0.0


def test_apply_tick_launch_profile():
    s = SpacecraftState(phase=MissionPhase.LAUNCH)
    physics.apply_tick(s, 2.0, 10.0, 1.0)
    assert s.fuel_level == pytest.approx(98.0)
    assert s.altitude == pytest.approx(10.0)
    assert s.velocity == pytest.approx(1.0)


def test_apply_tick_consumes_before_moving():
    s = SpacecraftState(fuel_level=50.0, altitude=20.0, velocity=2.0)
    physics.apply_tick(s, 2.0, 10.0, 1.0)
    # Consumption uses the pre-tick altitude/velocity: 2 + 0.2 + 0.2
    assert s.fuel_level == pytest.approx(47.6)


def test_apply_tick_clamps_velocity_to_zero():
    s = SpacecraftState(fuel_level=50.0, altitude=50.0, velocity=0.3)
    physics.apply_tick(s, 1.5, -10.0, -0.5)
    assert s.velocity == 0.0
    assert s.altitude == pytest.approx(40.0)


def test_apply_tick_without_fuel_cannot_climb_or_accelerate():
    s = SpacecraftState(fuel_level=1.0, altitude=40.0, velocity=4.0)
    exhausted = physics.apply_tick(s, 2.0, 10.0, 1.0)
    assert exhausted is True
    assert s.fuel_level == 0.0
    assert s.altitude == pytest.approx(40.0)
    assert s.velocity == pytest.approx(4.0)


def test_apply_tick_without_fuel_still_descends():
    s = SpacecraftState(fuel_level=0.0, altitude=40.0, velocity=4.0)
    physics.apply_tick(s, 1.5, -10.0, -0.5)
    assert s.altitude == pytest.approx(30.0)
    assert s.velocity == pytest.approx(3.5)
    assert s.fuel_level == 0.0


def test_fuel_never_regenerates():
    s = SpacecraftState()
    previous = s.fuel_level
    for _ in range(60):
        physics.apply_tick(s, 2.0, 10.0, 1.0)
        assert s.fuel_level <= previous
        previous = s.fuel_level
    assert s.fuel_level == 0.0


def test_update_coordinates(orbit_state):
    lat, lon = orbit_state.latitude, orbit_state.longitude
    physics.update_coordinates(orbit_state)
    assert orbit_state.longitude == pytest.approx(lon + 0.1)
    assert orbit_state.latitude == pytest.approx(lat + 0.05)


def test_update_coordinates_does_not_normalize():
    s = SpacecraftState(longitude=179.95, velocity=10.0)
    physics.update_coordinates(s)
    assert s.longitude == pytest.approx(180.05)


def test_consume_fuel_on_empty_tank_is_silent(events):
    s = SpacecraftState(fuel_level=0.0, systems_nominal=False)
    assert physics.consume_fuel(s, 1.0, events) is False
    assert s.fuel_level == 0.0
    assert events.recorded == []
