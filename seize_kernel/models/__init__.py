"""Seize Kernel data models."""

from seize_kernel.models.agent import AgentConfig, AgentResult, ConvergenceCheck
from seize_kernel.models.intent import Goal, GoalCategory, Priority
from seize_kernel.models.plan import (
    ExecutionPlan,
    ExecutionStrategy,
    Task,
    TaskStatus,
    TaskType,
)
from seize_kernel.models.transformation import (
    TransformationPhase,
    TransformationResult,
)
from seize_kernel.models.world import (
    Decision,
    ExecutionContext,
    KnowledgeBase,
    Learning,
    Principle,
    PrincipleCategory,
    World,
)

__all__ = [
    "AgentConfig",
    "AgentResult",
    "ConvergenceCheck",
    "Decision",
    "ExecutionContext",
    "ExecutionPlan",
    "ExecutionStrategy",
    "Goal",
    "GoalCategory",
    "KnowledgeBase",
    "Learning",
    "Principle",
    "PrincipleCategory",
    "Priority",
    "Task",
    "TaskStatus",
    "TaskType",
    "TransformationPhase",
    "TransformationResult",
    "World",
]
