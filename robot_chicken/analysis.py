"""
Trial analysis functions
"""

from typing import Any, Dict

import numpy as np


class TrialAnalyzer:
    """Analyzes recorded traces trial by trial for near misses and collisions"""

    def __init__(self, threshold: float = 0.0) -> None:
        """
        Initialize trial analyzer

        Args:
            threshold: Clearance below which a step counts as a collision
        """
        self.threshold = threshold

    def analyze(self, traces: Dict[str, np.ndarray]) -> Dict[int, Dict[str, Any]]:
        """
        Summarize each trial contained in the traces

        Trials are split after every trial-ending step and wherever the trial
        index changes (a flinch ends a trial without a reset step). A trial
        index that recurs after the session wraps is reported under its
        latest run.

        Args:
            traces: Output of TraceRecorder.as_arrays()

        Returns:
            Dictionary keyed by trial index with steps, duration,
            min_clearance, collided and final_position
        """
        trials = traces["trial"]
        results: Dict[int, Dict[str, Any]] = {}
        if len(trials) == 0:
            return results

        split = (np.diff(trials) != 0) | traces["reset"][:-1]
        boundaries = np.flatnonzero(split) + 1
        starts = np.concatenate(([0], boundaries))
        ends = np.concatenate((boundaries, [len(trials)]))

        for start, end in zip(starts, ends):
            clearance = traces["clearance"][start:end]
            times = traces["time"][start:end]
            final_position = traces["position"][end - 1]
            min_clearance = float(np.min(clearance))
            results[int(trials[start])] = {
                "steps": int(end - start),
                "duration": float(times[-1] - times[0]) if len(times) > 1 else 0.0,
                "min_clearance": min_clearance,
                "collided": bool(min_clearance < self.threshold),
                "final_position": final_position.copy(),
            }
        return results

    def summarize(self, per_trial: Dict[int, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Aggregate per-trial results

        Args:
            per_trial: Output of analyze()

        Returns:
            Dictionary with trials, collisions, collision_rate and min_clearance
        """
        if not per_trial:
            return {
                "trials": 0,
                "collisions": 0,
                "collision_rate": 0.0,
                "min_clearance": float("inf"),
            }
        collisions = sum(1 for result in per_trial.values() if result["collided"])
        min_clearance = min(result["min_clearance"] for result in per_trial.values())
        return {
            "trials": len(per_trial),
            "collisions": collisions,
            "collision_rate": collisions / len(per_trial),
            "min_clearance": float(min_clearance),
        }
