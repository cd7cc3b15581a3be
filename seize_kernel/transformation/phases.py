"""
The six transformation phases, Θ = θ₆ ∘ θ₅ ∘ θ₄ ∘ θ₃ ∘ θ₂ ∘ θ₁.

  θ₁ understand  read-only   summarize world + plan
  θ₂ generate    read-only   one artifact per task prompt
  θ₃ allocate    read-only   describe the execution strategy
  θ₄ execute     mutating    record each task in history (+ decision record)
  θ₅ integrate   mutating    metadata["last_integration"]
  θ₆ learn       mutating    append one Learning

Each phase takes a PhaseContext and returns a TransformationResult.
PIPELINE fixes their order; the transformer runs it as-is.
"""

from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.models.plan import ExecutionPlan, ExecutionStrategy
from seize_kernel.models.transformation import (
    TransformationPhase,
    TransformationResult,
)
from seize_kernel.models.world import Learning
from seize_kernel.world_model.store import WorldModelStore

LEARNING_CONFIDENCE = 0.85
LEARNING_SOURCE = "UnifiedAgentFormula"
INTEGRATION_METADATA_KEY = "last_integration"

STRATEGY_DESCRIPTIONS: Dict[ExecutionStrategy, str] = {
    ExecutionStrategy.SEQUENTIAL: "逐次実行",
    ExecutionStrategy.PARALLEL: "並列実行",
    ExecutionStrategy.ADAPTIVE: "適応的実行",
}


class PhaseContext:
    """Everything a phase may read, plus the results of earlier phases."""

    def __init__(
        self,
        plan: ExecutionPlan,
        store: WorldModelStore,
        charter: Optional[CharterPolicy] = None,
        now: Optional[datetime] = None,
    ):
        self.plan = plan
        self.store = store
        self.charter = charter
        self.now = now or datetime.utcnow()
        self.results: Dict[TransformationPhase, TransformationResult] = {}


def understand(ctx: PhaseContext) -> TransformationResult:
    """θ₁: summarize the current world and plan."""
    world = ctx.store.model
    summary = (
        f"World Version: {world.version}, "
        f"Tasks: {len(ctx.plan.tasks)}, "
        f"Knowledge: {len(world.knowledge.principles)} principles"
    )
    return TransformationResult(
        phase=TransformationPhase.UNDERSTAND,
        success=True,
        message=f"世界状態を理解しました: {summary}",
        artifacts=[summary],
    )


def generate(ctx: PhaseContext) -> TransformationResult:
    """θ₂: one artifact per task prompt."""
    artifacts = [f"Task {task.id}: {task.prompt}" for task in ctx.plan.tasks]
    return TransformationResult(
        phase=TransformationPhase.GENERATE,
        success=True,
        message=f"{len(artifacts)}個のタスクプロンプトを生成しました",
        artifacts=artifacts,
    )


def allocate(ctx: PhaseContext) -> TransformationResult:
    """θ₃: describe how the plan would be scheduled."""
    description = STRATEGY_DESCRIPTIONS[ctx.plan.strategy]
    return TransformationResult(
        phase=TransformationPhase.ALLOCATE,
        success=True,
        message=f"実行戦略を決定: {description}",
        artifacts=[description],
    )


def execute(ctx: PhaseContext) -> TransformationResult:
    """θ₄: record every task in history, in plan order."""
    executed = []
    for task in ctx.plan.tasks:
        # Tasks are recorded, not run against an external system
        ctx.store.append_history(f"Executed: {task.id} - {task.description}")
        executed.append(task.id)

    if ctx.charter is not None:
        ctx.store.record_decision(
            ctx.charter.build_decision(ctx.plan, timestamp=ctx.now)
        )

    return TransformationResult(
        phase=TransformationPhase.EXECUTE,
        success=True,
        message=f"{len(executed)}個のタスクを実行しました",
        artifacts=executed,
    )


def integrate(ctx: PhaseContext) -> TransformationResult:
    """θ₅: fold the execution outcome into world metadata."""
    executed = ctx.results[TransformationPhase.EXECUTE]
    summary = (
        f"Integrated {len(executed.artifacts)} artifacts "
        f"into World v{ctx.store.version}"
    )
    ctx.store.set_metadata(INTEGRATION_METADATA_KEY, summary)
    return TransformationResult(
        phase=TransformationPhase.INTEGRATE,
        success=True,
        message=summary,
    )


def learn(ctx: PhaseContext) -> TransformationResult:
    """θ₆: remember what this goal led to."""
    integrated = ctx.results[TransformationPhase.INTEGRATE]
    ctx.store.record_learning(Learning(
        timestamp=ctx.now,
        content=f"Goal: {ctx.plan.goal.description} -> Result: {integrated.message}",
        source=LEARNING_SOURCE,
        confidence=LEARNING_CONFIDENCE,
    ))
    total = len(ctx.store.model.knowledge.learnings)
    return TransformationResult(
        phase=TransformationPhase.LEARN,
        success=True,
        message=f"学習を記録しました (Total: {total} learnings)",
    )


PhaseFn = Callable[[PhaseContext], TransformationResult]

# (phase, function, mutates world)
PIPELINE: Tuple[Tuple[TransformationPhase, PhaseFn, bool], ...] = (
    (TransformationPhase.UNDERSTAND, understand, False),
    (TransformationPhase.GENERATE, generate, False),
    (TransformationPhase.ALLOCATE, allocate, False),
    (TransformationPhase.EXECUTE, execute, True),
    (TransformationPhase.INTEGRATE, integrate, True),
    (TransformationPhase.LEARN, learn, True),
)
