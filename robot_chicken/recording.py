"""
In-memory telemetry of a driving session
"""

from typing import Dict, List

import numpy as np

from robot_chicken.state import StepEvent


class TraceRecorder:
    """Step listener that keeps the per-tick traces of a session"""

    def __init__(self) -> None:
        self.clock_trace: List[float] = []
        self.trial_trace: List[int] = []
        self.time_trace: List[float] = []
        self.state_trace: List[np.ndarray] = []
        self.position_trace: List[np.ndarray] = []
        self.clearance_trace: List[float] = []
        self.collision_trace: List[bool] = []
        self.reset_trace: List[bool] = []
        self.reset_events: List[float] = []  # clock (ms) of every trial-ending tick

    def __call__(self, event: StepEvent) -> None:
        self.clock_trace.append(event.clock_ms)
        self.trial_trace.append(event.trial)
        self.time_trace.append(event.trial_time)
        self.state_trace.append(np.array(event.state, dtype=float))
        self.position_trace.append(np.array(event.position, dtype=float))
        self.clearance_trace.append(event.clearance)
        self.collision_trace.append(event.collided)
        self.reset_trace.append(event.reset)
        if event.reset:
            self.reset_events.append(event.clock_ms)

    def __len__(self) -> int:
        return len(self.clock_trace)

    def as_arrays(self) -> Dict[str, np.ndarray]:
        """
        Convert the traces to numpy arrays

        Returns:
            Dictionary with keys clock, trial, time, state [N x state_dim],
            position [N x 2], clearance, collided, reset and resets
        """
        if self.state_trace:
            states = np.vstack(self.state_trace)
            positions = np.vstack(self.position_trace)
        else:
            states = np.zeros((0, 0))
            positions = np.zeros((0, 2))
        return {
            "clock": np.array(self.clock_trace, dtype=float),
            "trial": np.array(self.trial_trace, dtype=int),
            "time": np.array(self.time_trace, dtype=float),
            "state": states,
            "position": positions,
            "clearance": np.array(self.clearance_trace, dtype=float),
            "collided": np.array(self.collision_trace, dtype=bool),
            "reset": np.array(self.reset_trace, dtype=bool),
            "resets": np.array(self.reset_events, dtype=float),
        }
