"""
Error types raised by the simulation core
"""

from typing import Tuple


class SimulationError(Exception):
    """Base class for all robot_chicken errors"""


class DimensionMismatch(SimulationError, ValueError):
    """A state or control vector does not match the dynamics' declared dimension"""

    def __init__(self, what: str, expected: int, shape: Tuple[int, ...]) -> None:
        self.what = what
        self.expected = expected
        self.shape = tuple(shape)
        super().__init__(f"{what} has shape {self.shape}, expected ({expected},)")


class InvalidObstacle(SimulationError, ValueError):
    """Obstacle constructed with impossible geometry (e.g. negative radius)"""


class ConfigurationError(SimulationError, ValueError):
    """Driver or evaluator configuration that cannot be run"""
