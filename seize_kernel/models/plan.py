"""Execution Plan — what the Command Stack hands to the World Transformer."""

from enum import Enum
from typing import List

from pydantic import BaseModel

from seize_kernel.models.intent import Goal


class TaskType(str, Enum):
    FILE_READ = "file_read"
    FILE_WRITE = "file_write"
    CODE_GENERATION = "code_generation"
    VALIDATION = "validation"
    ANALYSIS = "analysis"
    DECISION = "decision"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class ExecutionStrategy(str, Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"       # Reserved, never selected by the planner
    ADAPTIVE = "adaptive"


class Task(BaseModel):
    """A single step in a plan."""

    id: str                             # e.g., "task_0"
    description: str
    type: TaskType
    dependencies: List[str] = []        # Ids of earlier tasks in the same plan
    prompt: str = ""                    # Filled in by prompt generation
    status: TaskStatus = TaskStatus.PENDING


class ExecutionPlan(BaseModel):
    """Ordered tasks for one iteration plus the chosen strategy."""

    goal: Goal
    tasks: List[Task]
    strategy: ExecutionStrategy

    def validate_dependencies(self) -> List[str]:
        """
        Return a list of problems with task ids and dependency edges.

        An empty list means every id is unique and every dependency points
        at a task emitted earlier in the plan.
        """
        problems = []
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                problems.append(f"duplicate task id: {task.id}")
            for dep in task.dependencies:
                if dep not in seen:
                    problems.append(
                        f"task {task.id} depends on {dep}, "
                        f"which is not an earlier task"
                    )
            seen.add(task.id)
        return problems
