"""
Spacecraft Mission Simulation Package

A deterministic, discrete-tick simulation of a single spacecraft's mission
lifecycle (launch, orbital stabilization, optional return) supervised by a
safety layer that forces an emergency return when the craft becomes unsafe.

Modules:
    - constants: Profile values, thresholds and launch site
    - state: Craft state dataclass and mission phases
    - config: Immutable simulation configuration
    - clock: Mission clock and per-tick pacing
    - physics: Fuel, altitude, velocity and ground-track updates
    - validation: Route validation and invariant checks
    - safety: Fault detection and backup system recovery
    - emergency: Forced descent / degraded hold procedure
    - commands: Two-step operator return command port
    - telemetry: Telemetry and fault sinks
    - mission_manager: Mission state machine
    - main: Mission entry point
    - plotting: Mission profile plots
    - cli: Command-line interface
"""

from .state import MissionPhase, SpacecraftState, create_initial_state
from .main import run_mission, MissionResult
from .mission_manager import MissionStateMachine, MissionStateError, OrbitHoldOutcome
from .config import SimulationConfig, create_default_config, create_test_config

__version__ = "1.0.0"
__author__ = "Spacecraft Simulation Team"

__all__ = [
    'MissionPhase',
    'SpacecraftState',
    'create_initial_state',
    'run_mission',
    'MissionResult',
    'MissionStateMachine',
    'MissionStateError',
    'OrbitHoldOutcome',
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
]
