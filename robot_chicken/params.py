"""
Driver configuration
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from robot_chicken.errors import ConfigurationError
from robot_chicken.obstacle import Obstacle

# Lateral offsets of the supervisor-flinch trials, in presentation order
TRIAL_OFFSETS_Y: Tuple[float, ...] = (
    -2, 1.75, 0.25, 0.50, 0, 1.50, -0.750, -1.75, 1.75, 1.25, -1.25,
    0.750, 0.750, -2.25, 2.25, -1.50, -1.750, -0.25, -0.50, 0, 2, -1, 0, -2, 0,
    1.25, 1, -0.750, 0.25, -1.50, 0.50, 0, -1.25, -1, 1.50, 1, -0.50, 0, 2, -2.25,
    -0.25, 2.25,
)
START_X = -8.0


def default_initial_conditions(
    x0: float = START_X, offsets: Sequence[float] = TRIAL_OFFSETS_Y
) -> List[np.ndarray]:
    """Unicycle start states [x0, y0, 0] for each lateral offset"""
    return [np.array([x0, float(y0), 0.0]) for y0 in offsets]


def default_obstacles() -> List[Obstacle]:
    return [Obstacle(0.0, 0.0, 1.8)]


@dataclass
class DriverConfig:
    """Session parameters for the simulation driver"""

    initial_conditions: List[np.ndarray] = field(default_factory=default_initial_conditions)
    time_scale: float = 0.0005 * 4  # simulated s per wall ms
    warmup_ms: float = 3000.0  # countdown before the first trial (ms)
    obstacles: List[Obstacle] = field(default_factory=default_obstacles)
    agent_effective_radius: float = 0.55  # car footprint radius
    # Trial ends once the agent leaves (xmin, xmax, ymin, ymax)
    bounds: Tuple[float, float, float, float] = (-math.inf, 1.0, -math.inf, math.inf)
    horizon: float = (2.0 - START_X) / 3.0  # simulated s per trial
    reset_hold: float = 1.0  # simulated s frozen after each reset
    reset_speed: float = 3.0  # forward speed given on every reset
    max_tick_ms: Optional[float] = None  # clamp on a single wall tick

    def __post_init__(self) -> None:
        """Validate parameters"""
        if len(self.initial_conditions) == 0:
            raise ConfigurationError("initial_conditions must not be empty")
        self.initial_conditions = [
            np.asarray(state, dtype=float) for state in self.initial_conditions
        ]
        lengths = {len(state) for state in self.initial_conditions}
        if len(lengths) != 1:
            raise ConfigurationError(
                f"initial_conditions have mixed lengths {sorted(lengths)}"
            )
        if not self.warmup_ms > 0:
            raise ConfigurationError(f"warmup_ms must be > 0, got {self.warmup_ms}")
        if not self.time_scale > 0:
            raise ConfigurationError(f"time_scale must be > 0, got {self.time_scale}")
        if not self.agent_effective_radius >= 0:
            raise ConfigurationError(
                f"agent_effective_radius must be >= 0, got {self.agent_effective_radius}"
            )
        if not self.reset_hold >= 0:
            raise ConfigurationError(f"reset_hold must be >= 0, got {self.reset_hold}")
        if self.max_tick_ms is not None and not self.max_tick_ms > 0:
            raise ConfigurationError(f"max_tick_ms must be > 0, got {self.max_tick_ms}")
        if not self.horizon > 0:
            raise ConfigurationError(f"horizon must be > 0, got {self.horizon}")
        xmin, xmax, ymin, ymax = self.bounds
        if not (xmin <= xmax and ymin <= ymax):
            raise ConfigurationError(
                f"bounds must satisfy xmin <= xmax and ymin <= ymax, got {self.bounds}"
            )

    @property
    def state_dim(self) -> int:
        return len(self.initial_conditions[0])
