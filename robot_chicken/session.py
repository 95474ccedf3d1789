"""
Headless session runner
"""

import logging
from typing import Any, Dict, Optional

from robot_chicken.analysis import TrialAnalyzer
from robot_chicken.dynamics import Dynamics
from robot_chicken.errors import ConfigurationError
from robot_chicken.params import DriverConfig
from robot_chicken.recording import TraceRecorder
from robot_chicken.simulator import Controller, SimulationDriver

logger = logging.getLogger(__name__)


def run_session(
    config: Optional[DriverConfig] = None,
    dynamics: Optional[Dynamics] = None,
    controller: Optional[Controller] = None,
    tick_ms: float = 2.0,
    max_ticks: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Run a session with a fixed wall-clock tick until it completes

    Args:
        config: Session parameters (defaults to the supervisor-flinch experiment)
        dynamics: Robot model (defaults to a unicycle)
        controller: Control policy (defaults to zero input)
        tick_ms: Wall time per tick in milliseconds
        max_ticks: Stop after this many ticks even if the session is not complete

    Returns:
        Dictionary with traces, flinches, per-trial analysis, summary,
        tick count and completion flag

    Raises:
        ConfigurationError: tick_ms is not positive
    """
    if not tick_ms > 0:
        raise ConfigurationError(f"tick_ms must be > 0, got {tick_ms}")
    config = config if config is not None else DriverConfig()
    driver = SimulationDriver(config, dynamics=dynamics, controller=controller)
    recorder = TraceRecorder()
    driver.add_step_listener(recorder)

    ticks = 0
    while not driver.complete and (max_ticks is None or ticks < max_ticks):
        driver.tick(tick_ms)
        ticks += 1

    if not driver.complete:
        logger.warning("Session stopped after %d ticks on trial %d without completing",
                       ticks, driver.trial_index)

    traces = recorder.as_arrays()
    analyzer = TrialAnalyzer(threshold=driver.evaluator.threshold)
    per_trial = analyzer.analyze(traces)

    return {
        "traces": traces,
        "flinches": driver.flinches,
        "trials": per_trial,
        "summary": analyzer.summarize(per_trial),
        "ticks": ticks,
        "complete": driver.complete,
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")
    results = run_session()

    print("Session Results:")
    print("-" * 80)
    for trial, analysis in sorted(results["trials"].items()):
        x, y = analysis["final_position"]
        print(f"\nTrial {trial}:")
        print(f"  Steps: {analysis['steps']}")
        print(f"  Duration: {analysis['duration']:.2f} s")
        print(f"  Min clearance: {analysis['min_clearance']:.3f}")
        print(f"  Collided: {analysis['collided']}")
        print(f"  Final position: ({x:.2f}, {y:.2f})")

    summary = results["summary"]
    print("-" * 80)
    print(f"Trials: {summary['trials']}  Collisions: {summary['collisions']}  "
          f"Collision rate: {summary['collision_rate'] * 100:.1f}%")
