"""
Simulation state records
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass
class Pose:
    """Agent pose in simulation coordinates (handed to the renderer)"""

    x: float  # Horizontal position
    y: float  # Vertical/lateral position
    heading: float  # Orientation (rad)


class Phase(Enum):
    """Session phase of the simulation driver"""

    COUNTDOWN = "countdown"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass
class StepEvent:
    """Per-tick "state updated" notification"""

    clock_ms: float  # Wall clock since session start (ms)
    trial: int  # Index of the initial condition being run
    trial_time: float  # Simulated time since the trial started (s)
    state: np.ndarray  # Agent state after integration
    position: np.ndarray  # Point used for proximity (x, y)
    clearance: float  # Smallest proximity value over all obstacles
    collided: bool  # Proximity fell below the evaluator threshold
    reset: bool = False  # Trial ended on this tick


@dataclass
class Flinch:
    """Supervisor intervention recorded when a trial is cut short"""

    clock_ms: float  # Wall clock of the intervention (ms)
    trial: int  # Trial that was interrupted
    state: np.ndarray  # Agent state at the moment of the intervention
