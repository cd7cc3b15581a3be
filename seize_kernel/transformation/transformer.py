"""
World Transformer — Θ: (ExecutionPlan, World) → World.

Behavioral Contract:
- Runs the six phases of PIPELINE strictly in order; none is skipped
- Phases θ₁–θ₃ only read; θ₄–θ₆ mutate the World in place
- The World is snapshotted before the first mutating phase; if any phase
  raises or reports success=False, the snapshot is restored and a
  TransformationError is raised, so a failed iteration commits nothing
- On success the version advances by exactly one, after θ₆
"""

from datetime import datetime
from typing import Callable, List, Optional

from seize_kernel.errors import TransformationError
from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.models.plan import ExecutionPlan
from seize_kernel.models.transformation import TransformationResult
from seize_kernel.models.world import World
from seize_kernel.observability.logging import get_logger
from seize_kernel.transformation.phases import PIPELINE, PhaseContext
from seize_kernel.world_model.store import WorldModelStore

logger = get_logger(__name__)


class WorldTransformer:
    """
    Applies execution plans to a World.

    Pass a CharterPolicy to have θ₄ append a Decision Record per plan.
    """

    def __init__(
        self,
        charter: Optional[CharterPolicy] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.charter = charter
        self.clock = clock
        self.last_results: List[TransformationResult] = []

    def apply(self, plan: ExecutionPlan, world: World) -> World:
        """Transform `world` in place and return it."""
        store = WorldModelStore(world)
        ctx = PhaseContext(plan, store, charter=self.charter, now=self.clock())
        snapshot: Optional[World] = None
        results: List[TransformationResult] = []

        for phase, run_phase, mutates in PIPELINE:
            if mutates and snapshot is None:
                snapshot = store.snapshot()

            try:
                result = run_phase(ctx)
            except Exception as e:
                self._roll_back(store, snapshot)
                logger.error("phase_failed", phase=phase.value, error=str(e))
                raise TransformationError(phase, str(e), cause=e) from e

            if not result.success:
                self._roll_back(store, snapshot)
                logger.error("phase_failed", phase=phase.value, error=result.message)
                raise TransformationError(phase, result.message)

            ctx.results[phase] = result
            results.append(result)
            logger.info("phase_completed", phase=phase.value, message=result.message)

        version = store.advance()
        self.last_results = results
        logger.info("world_advanced", version=version)
        return world

    def _roll_back(self, store: WorldModelStore, snapshot: Optional[World]) -> None:
        """Undo mutations made by θ₄–θ₆ in the current application."""
        if snapshot is not None:
            store.restore(snapshot)
