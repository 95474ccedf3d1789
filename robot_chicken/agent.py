"""
Agent: a state vector driven by one dynamics model
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from robot_chicken.dynamics import Dynamics, UnicycleDynamics
from robot_chicken.state import Pose


class Agent:
    """Robot whose state changes only through step, reset and stop"""

    def __init__(self, dynamics: Dynamics, initial_state: Sequence[float]) -> None:
        """
        Initialize agent

        Args:
            dynamics: Update rule for this agent
            initial_state: Initial state vector (length must match the dynamics)
        """
        self.dynamics = dynamics
        self._state = dynamics.check_state(initial_state).copy()

    @property
    def state(self) -> np.ndarray:
        """Copy of the current state vector"""
        return self._state.copy()

    @property
    def position(self) -> np.ndarray:
        return self.dynamics.position(self._state)

    @property
    def speed(self) -> Optional[float]:
        """Forward speed for unicycle agents, None for other models"""
        if isinstance(self.dynamics, UnicycleDynamics):
            return self.dynamics.speed
        return None

    def dimension(self) -> Tuple[int, int]:
        return self.dynamics.dimension()

    def step(self, dt: float, u: Sequence[float]) -> np.ndarray:
        """
        Integrate one time step

        The new state is computed in full before it replaces the old one, so a
        DimensionMismatch leaves the agent unchanged.

        Args:
            dt: Step size (s)
            u: Control input

        Returns:
            Copy of the new state
        """
        self._state = self.dynamics.step(self._state, u, dt)
        return self.state

    def display_pose(self) -> Pose:
        return self.dynamics.display_pose(self._state)

    def reset(self, state: Sequence[float], speed: Optional[float] = None) -> None:
        """
        Reassign the state for a new trial

        Args:
            state: New state vector
            speed: Forward speed to restore (unicycle agents)
        """
        new_state = self.dynamics.check_state(state).copy()
        self.dynamics.reset(speed)
        self._state = new_state

    def stop(self) -> None:
        self._state = self.dynamics.stop(self._state)
