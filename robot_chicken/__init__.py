"""
Robot Chicken Simulation Core

This package steps control-affine robot models forward under externally
supplied control inputs and evaluates their clearance to round obstacles,
driving the supervisor-flinch trials one timer tick at a time.
"""

from robot_chicken.agent import Agent
from robot_chicken.analysis import TrialAnalyzer
from robot_chicken.dynamics import (
    Dynamics,
    PlanarDoubleIntegrator,
    TrivialDynamics,
    UnicycleDynamics,
    VerticalDoubleIntegrator,
)
from robot_chicken.errors import (
    ConfigurationError,
    DimensionMismatch,
    InvalidObstacle,
    SimulationError,
)
from robot_chicken.obstacle import NO_OBSTACLE, Obstacle, ProximityEvaluator
from robot_chicken.params import DriverConfig, default_initial_conditions
from robot_chicken.recording import TraceRecorder
from robot_chicken.session import run_session
from robot_chicken.simulator import SimulationDriver
from robot_chicken.state import Flinch, Phase, Pose, StepEvent

__all__ = [
    "Agent",
    "ConfigurationError",
    "DimensionMismatch",
    "DriverConfig",
    "Dynamics",
    "Flinch",
    "InvalidObstacle",
    "NO_OBSTACLE",
    "Obstacle",
    "Phase",
    "PlanarDoubleIntegrator",
    "Pose",
    "ProximityEvaluator",
    "SimulationDriver",
    "SimulationError",
    "StepEvent",
    "TraceRecorder",
    "TrialAnalyzer",
    "TrivialDynamics",
    "UnicycleDynamics",
    "VerticalDoubleIntegrator",
    "default_initial_conditions",
    "run_session",
]
