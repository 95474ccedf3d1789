"""
Obstacle geometry and proximity model
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from robot_chicken.errors import ConfigurationError, InvalidObstacle

# Proximity reported when no active obstacle is present
NO_OBSTACLE = math.inf


@dataclass(frozen=True)
class Obstacle:
    """Round obstacle; a NaN radius marks it as inactive"""

    cx: float  # Center x
    cy: float  # Center y
    radius: float  # Radius (0 for a point obstacle, NaN when inactive)
    spin: float = math.nan  # Auxiliary rotation rate, carried for the renderer

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise InvalidObstacle(f"obstacle radius must be >= 0, got {self.radius}")

    @classmethod
    def inactive(cls, cx: float = 0.0, cy: float = 0.0) -> "Obstacle":
        return cls(cx, cy, math.nan)

    @property
    def active(self) -> bool:
        return not math.isnan(self.radius)

    @property
    def center(self) -> np.ndarray:
        return np.array([self.cx, self.cy])


class ProximityEvaluator:
    """Signed clearance between a round agent and round obstacles"""

    def __init__(self, agent_effective_radius: float, threshold: float = 0.0) -> None:
        """
        Initialize proximity evaluator

        Args:
            agent_effective_radius: Radius of the disc bounding the agent
            threshold: Proximity values below this count as a collision
        """
        if agent_effective_radius < 0:
            raise ConfigurationError(
                f"agent_effective_radius must be >= 0, got {agent_effective_radius}"
            )
        self.agent_effective_radius = agent_effective_radius
        self.threshold = threshold

    def evaluate(self, position: Sequence[float], obstacle: Obstacle) -> float:
        """
        Calculate proximity of the agent to one obstacle

        Args:
            position: Agent position (x, y)
            obstacle: Obstacle to test against

        Returns:
            distance(position, center) - (obstacle radius + agent radius);
            negative means overlap, NO_OBSTACLE for an inactive obstacle
        """
        if not obstacle.active:
            return NO_OBSTACLE
        position = np.asarray(position, dtype=float)[:2]
        distance = float(np.linalg.norm(position - obstacle.center))
        return distance - (obstacle.radius + self.agent_effective_radius)

    def evaluate_all(self, position: Sequence[float], obstacles: Iterable[Obstacle]) -> float:
        """Smallest proximity over all obstacles (NO_OBSTACLE if none are active)"""
        return min(
            (self.evaluate(position, obstacle) for obstacle in obstacles),
            default=NO_OBSTACLE,
        )

    def collides(self, value: float) -> bool:
        return value < self.threshold
