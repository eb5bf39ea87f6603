import pytest
import spacecraft_sim.constants as C

def test_initial_conditions():
    assert C.INITIAL_FUEL_LEVEL == 100.0
    assert C.INITIAL_ALTITUDE == 0.0
    assert C.INITIAL_VELOCITY == 0.0
    assert -90.0 <= C.LAUNCH_LATITUDE <= 90.0
    assert -180.0 < C.LAUNCH_LONGITUDE <= 180.0

def test_consumption_model():
    assert C.VELOCITY_CONSUMPTION_FACTOR == pytest.approx(0.1)
    assert C.ALTITUDE_CONSUMPTION_FACTOR == pytest.approx(0.01)

def test_phase_profiles():
    assert C.LAUNCH_BASE_CONSUMPTION == 2.0
    assert C.ORBIT_BASE_CONSUMPTION == 1.0
    assert C.RETURN_BASE_CONSUMPTION == 1.5
    assert C.EMERGENCY_BASE_CONSUMPTION == 1.0
    assert C.ORBIT_STABILIZATION_TICKS == 5
    assert C.ORBIT_ALTITUDE == 100.0

def test_envelope_and_thresholds():
    assert C.ALTITUDE_FLOOR < C.BASELINE_ALTITUDE < C.ALTITUDE_CEILING
    assert 0.0 < C.CRITICAL_FUEL_LEVEL < C.INITIAL_FUEL_LEVEL
    assert C.FAULT_DWELL_SECONDS == 1800.0

def test_simulation_parameters():
    assert C.TICK_SECONDS > 0
    assert C.TICK_DELAY >= 0
