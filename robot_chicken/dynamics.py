"""
Robot dynamics equations

Every model is control-affine, d(state)/dt = f(state) + B(state) @ u, and is
advanced with explicit forward Euler so recorded traces stay reproducible.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

import numpy as np

from robot_chicken.errors import DimensionMismatch
from robot_chicken.state import Pose

logger = logging.getLogger(__name__)


class Dynamics(ABC):
    """Discrete-time update rule shared by all robot models"""

    state_dim: int = 0
    control_dim: int = 0

    def dimension(self) -> Tuple[int, int]:
        """Return (state_dim, control_dim)"""
        return self.state_dim, self.control_dim

    @abstractmethod
    def drift(self, state: np.ndarray) -> np.ndarray:
        """Autonomous part f(state) of the derivative"""

    @abstractmethod
    def control_coefficient(self, state: np.ndarray) -> np.ndarray:
        """Control-affine matrix B(state), shape (state_dim, control_dim)"""

    @abstractmethod
    def display_pose(self, state: np.ndarray) -> Pose:
        """Pose in simulation coordinates for the external renderer"""

    def derivative(self, state: np.ndarray, control: np.ndarray) -> np.ndarray:
        """
        System dynamics: d(state)/dt = f(state) + B(state) @ u

        Args:
            state: State vector
            control: Control vector

        Returns:
            Derivative of state vector
        """
        return self.drift(state) + self.control_coefficient(state) @ control

    def step(self, state: Sequence[float], control: Sequence[float], dt: float) -> np.ndarray:
        """
        Advance the state by one forward-Euler step

        Args:
            state: Current state vector
            control: Control input for this step
            dt: Step size (s)

        Returns:
            New state vector (the input is not modified)

        Raises:
            DimensionMismatch: state or control has the wrong shape
        """
        state = self.check_state(state)
        control = self.check_control(control)
        new_state = state + dt * self.derivative(state, control)
        return self.wrap(new_state)

    def wrap(self, state: np.ndarray) -> np.ndarray:
        """Post-integration normalization of the state (identity by default)"""
        return state

    def position(self, state: np.ndarray) -> np.ndarray:
        """Point used for proximity evaluation"""
        pose = self.display_pose(state)
        return np.array([pose.x, pose.y])

    def stop(self, state: np.ndarray) -> np.ndarray:
        """Collision response: remove the agent's forward motion"""
        return np.array(state, dtype=float)

    def reset(self, speed: Optional[float] = None) -> None:
        """Restore model parameters at the start of a trial"""

    def check_state(self, state: Sequence[float]) -> np.ndarray:
        state = np.asarray(state, dtype=float)
        if state.ndim != 1 or state.shape[0] != self.state_dim:
            raise DimensionMismatch("state", self.state_dim, state.shape)
        return state

    def check_control(self, control: Sequence[float]) -> np.ndarray:
        control = np.atleast_1d(np.asarray(control, dtype=float))
        if control.ndim != 1 or control.shape[0] != self.control_dim:
            raise DimensionMismatch("control", self.control_dim, control.shape)
        return control


class TrivialDynamics(Dynamics):
    """No drift and no control authority; the state never changes"""

    control_dim = 0

    def __init__(self, state_dim: int = 1) -> None:
        self.state_dim = state_dim

    def drift(self, state: np.ndarray) -> np.ndarray:
        return np.zeros(self.state_dim)

    def control_coefficient(self, state: np.ndarray) -> np.ndarray:
        return np.zeros((self.state_dim, self.control_dim))

    def display_pose(self, state: np.ndarray) -> Pose:
        padded = np.zeros(3)
        n = min(3, len(state))
        padded[:n] = state[:n]
        return Pose(float(padded[0]), float(padded[1]), float(padded[2]))


class PlanarDoubleIntegrator(Dynamics):
    """
    Simplified quadrotor moving in the plane

    State: [x, vx, y, vy]
    Control: [ax, ay]
    """

    state_dim = 4
    control_dim = 2

    _B = np.array([
        [0.0, 0.0],
        [1.0, 0.0],  # ax -> dvx/dt
        [0.0, 0.0],
        [0.0, 1.0],  # ay -> dvy/dt
    ])

    def drift(self, state: np.ndarray) -> np.ndarray:
        _, vx, _, vy = state
        return np.array([
            vx,  # dx/dt
            0.0,
            vy,  # dy/dt
            0.0,
        ])

    def control_coefficient(self, state: np.ndarray) -> np.ndarray:
        return self._B.copy()

    def display_pose(self, state: np.ndarray) -> Pose:
        return Pose(float(state[0]), float(state[2]), 0.0)

    def stop(self, state: np.ndarray) -> np.ndarray:
        stopped = np.array(state, dtype=float)
        stopped[[1, 3]] = 0.0
        return stopped


class VerticalDoubleIntegrator(Dynamics):
    """
    Simplified quadrotor restricted to the vertical axis

    State: [y, vy]
    Control: [ay]
    """

    state_dim = 2
    control_dim = 1

    _B = np.array([
        [0.0],
        [1.0],  # ay -> dvy/dt
    ])

    def drift(self, state: np.ndarray) -> np.ndarray:
        return np.array([state[1], 0.0])

    def control_coefficient(self, state: np.ndarray) -> np.ndarray:
        return self._B.copy()

    def display_pose(self, state: np.ndarray) -> Pose:
        return Pose(0.0, float(state[0]), 0.0)

    def stop(self, state: np.ndarray) -> np.ndarray:
        stopped = np.array(state, dtype=float)
        stopped[1] = 0.0
        return stopped


class UnicycleDynamics(Dynamics):
    """
    Dubins car: constant forward speed, steered by turn rate

    State: [x, y, theta]
    Control: [omega]
    """

    state_dim = 3
    control_dim = 1

    _B = np.array([
        [0.0],
        [0.0],
        [1.0],  # omega -> dtheta/dt
    ])

    def __init__(self, speed: float = 1.0) -> None:
        """
        Args:
            speed: Forward velocity magnitude
        """
        self.speed = float(speed)

    def drift(self, state: np.ndarray) -> np.ndarray:
        theta = state[2]
        return np.array([
            self.speed * np.cos(theta),  # dx/dt
            self.speed * np.sin(theta),  # dy/dt
            0.0,
        ])

    def control_coefficient(self, state: np.ndarray) -> np.ndarray:
        return self._B.copy()

    def wrap(self, state: np.ndarray) -> np.ndarray:
        # Single correction per step; a heading more than 2*pi out of range
        # stays out of range until later steps bring it back.
        if state[2] > np.pi:
            state[2] -= 2 * np.pi
        elif state[2] <= -np.pi:
            state[2] += 2 * np.pi
        return state

    def display_pose(self, state: np.ndarray) -> Pose:
        return Pose(float(state[0]), float(state[1]), float(state[2]))

    def stop(self, state: np.ndarray) -> np.ndarray:
        if self.speed != 0.0:
            logger.debug("Unicycle stopped (speed %.3f -> 0)", self.speed)
        self.speed = 0.0
        return np.array(state, dtype=float)

    def reset(self, speed: Optional[float] = None) -> None:
        if speed is not None:
            self.speed = float(speed)
