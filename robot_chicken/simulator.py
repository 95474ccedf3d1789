"""
Simulation driver: one discrete step per timer tick
"""

import logging
import math
from typing import Callable, List, Optional, Sequence

import numpy as np

from robot_chicken.agent import Agent
from robot_chicken.dynamics import Dynamics, UnicycleDynamics
from robot_chicken.errors import ConfigurationError
from robot_chicken.obstacle import ProximityEvaluator
from robot_chicken.params import DriverConfig
from robot_chicken.state import Flinch, Phase, StepEvent

logger = logging.getLogger(__name__)

Controller = Callable[[np.ndarray, float], Sequence[float]]
StepListener = Callable[[StepEvent], None]
CompleteListener = Callable[[], None]


class SimulationDriver:
    """Owns the session: clock, trial sequence, agent and obstacles"""

    def __init__(
        self,
        config: DriverConfig,
        dynamics: Optional[Dynamics] = None,
        controller: Optional[Controller] = None,
    ) -> None:
        """
        Initialize driver

        Args:
            config: Session parameters
            dynamics: Robot model (defaults to a unicycle at config.reset_speed)
            controller: Maps (state, trial_time) to a control input; defaults to zero input

        Raises:
            ConfigurationError: initial conditions do not fit the dynamics
        """
        self.config = config
        if dynamics is None:
            dynamics = UnicycleDynamics(speed=config.reset_speed)
        state_dim, _ = dynamics.dimension()
        if config.state_dim != state_dim:
            raise ConfigurationError(
                f"initial conditions have {config.state_dim} states, "
                f"{type(dynamics).__name__} expects {state_dim}"
            )
        self.agent = Agent(dynamics, config.initial_conditions[0])
        self.evaluator = ProximityEvaluator(config.agent_effective_radius)
        self.controller = controller if controller is not None else self._zero_control

        self._phase = Phase.COUNTDOWN
        self._clock_ms = 0.0
        self._trial_index = 0
        self._trial_time = -config.reset_hold
        self._complete_emitted = False
        self._flinches: List[Flinch] = []
        self._step_listeners: List[StepListener] = []
        self._complete_listeners: List[CompleteListener] = []

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def clock_ms(self) -> float:
        return self._clock_ms

    @property
    def trial_index(self) -> int:
        return self._trial_index

    @property
    def trial_time(self) -> float:
        return self._trial_time

    @property
    def complete(self) -> bool:
        return self._phase is Phase.COMPLETE

    @property
    def flinches(self) -> List[Flinch]:
        return list(self._flinches)

    def add_step_listener(self, listener: StepListener) -> None:
        self._step_listeners.append(listener)

    def add_complete_listener(self, listener: CompleteListener) -> None:
        self._complete_listeners.append(listener)

    def countdown_seconds(self) -> int:
        """Whole seconds left before the first trial starts"""
        if self._phase is not Phase.COUNTDOWN:
            return 0
        return max(0, math.ceil((self.config.warmup_ms - self._clock_ms) / 1000.0))

    def tick(self, wall_dt_ms: float) -> Optional[StepEvent]:
        """
        Advance the session by one timer tick

        Args:
            wall_dt_ms: Wall time elapsed since the previous tick (ms)

        Returns:
            The step event if the agent was integrated on this tick, else None
        """
        if self._phase is Phase.COMPLETE:
            return None

        wall_dt_ms = max(0.0, float(wall_dt_ms))
        if self.config.max_tick_ms is not None:
            wall_dt_ms = min(wall_dt_ms, self.config.max_tick_ms)
        clock_ms = self._clock_ms + wall_dt_ms

        if self._phase is Phase.COUNTDOWN and clock_ms <= self.config.warmup_ms:
            self._clock_ms = clock_ms
            return None

        dt = wall_dt_ms * self.config.time_scale
        trial_time = self._trial_time + dt
        if trial_time <= 0:
            self._commit_clocks(clock_ms, trial_time)
            return None

        # Nothing is committed until the controller and the step succeed
        u = self.controller(self.agent.state, trial_time)
        state = self.agent.step(dt, u)
        self._commit_clocks(clock_ms, trial_time)

        clearance = self.evaluator.evaluate_all(self.agent.position, self.config.obstacles)
        collided = self.evaluator.collides(clearance)
        event = StepEvent(
            clock_ms=self._clock_ms,
            trial=self._trial_index,
            trial_time=self._trial_time,
            state=state,
            position=self.agent.position,
            clearance=clearance,
            collided=collided,
        )

        if self._out_of_bounds() or self._trial_time > self.config.horizon:
            event.reset = True
        elif collided:
            self.agent.stop()

        logger.debug("t=%.3f trial=%d state=%s clearance=%.3f",
                     self._trial_time, event.trial, state, clearance)
        for listener in self._step_listeners:
            listener(event)

        if event.reset:
            self._next_trial()
        return event

    def flinch(self) -> Flinch:
        """
        Record a supervisor intervention and move on to the next trial

        Returns:
            The recorded intervention
        """
        record = Flinch(
            clock_ms=self._clock_ms,
            trial=self._trial_index,
            state=self.agent.state,
        )
        self._flinches.append(record)
        logger.info("Flinch during trial %d at state %s", record.trial, record.state)
        self._next_trial()
        return record

    def _commit_clocks(self, clock_ms: float, trial_time: float) -> None:
        self._clock_ms = clock_ms
        self._trial_time = trial_time
        if self._phase is Phase.COUNTDOWN:
            self._phase = Phase.RUNNING
            logger.info("Countdown finished after %.0f ms, starting trial %d",
                        self._clock_ms, self._trial_index)

    def _next_trial(self) -> None:
        conditions = self.config.initial_conditions
        self._trial_index += 1
        wrapped = self._trial_index >= len(conditions)
        if wrapped:
            self._trial_index = 0

        initial_state = conditions[self._trial_index]
        self.agent.reset(initial_state, speed=self.config.reset_speed)
        self._trial_time = -self.config.reset_hold
        logger.info("Reset robot state to %s (trial %d)", initial_state, self._trial_index)

        if wrapped and not self._complete_emitted:
            self._complete_emitted = True
            self._phase = Phase.COMPLETE
            logger.info("Session complete after %d trials, %d flinches",
                        len(conditions), len(self._flinches))
            for listener in self._complete_listeners:
                listener()

    def _out_of_bounds(self) -> bool:
        x, y = self.agent.position
        xmin, xmax, ymin, ymax = self.config.bounds
        return not (xmin <= x <= xmax and ymin <= y <= ymax)

    def _zero_control(self, state: np.ndarray, trial_time: float) -> np.ndarray:
        _, control_dim = self.agent.dimension()
        return np.zeros(control_dim)
