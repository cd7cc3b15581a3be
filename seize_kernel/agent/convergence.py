"""
Convergence Policy — when the agent loop may stop.

After iteration i (1-based), with h = len(history) and l = len(learnings):

    h >= 2i and l >= i                  → converged ("log_growth")
    min(1, h / 3i) >= threshold         → converged ("score")
    otherwise                           → keep iterating

This is a heuristic over accumulated logs, not a measure of task success.
Starting from empty logs, plans with at least two tasks satisfy the first
clause on the first iteration; single-task plans rely on the score clause,
which stays at 1/3 and so only converges for thresholds <= 1/3.
"""

from seize_kernel.models.agent import ConvergenceCheck
from seize_kernel.models.world import World


class ConvergencePolicy:
    """Evaluates the stop condition against a post-transformation World."""

    def __init__(self, threshold: float = 0.8):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold

    def check(self, world: World, iteration: int) -> ConvergenceCheck:
        if iteration < 1:
            raise ValueError(f"iteration must be >= 1, got {iteration}")

        history_length = len(world.context.history)
        learning_count = len(world.knowledge.learnings)
        score = min(1.0, history_length / (iteration * 3))

        if history_length >= iteration * 2 and learning_count >= iteration:
            converged, reason = True, "log_growth"
        elif score >= self.threshold:
            converged, reason = True, "score"
        else:
            converged, reason = False, "not_converged"

        return ConvergenceCheck(
            iteration=iteration,
            history_length=history_length,
            learning_count=learning_count,
            score=score,
            converged=converged,
            reason=reason,
        )
