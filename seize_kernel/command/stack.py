"""
Command Stack — 𝒞: Goal → ExecutionPlan.

𝒞 = C₃ ∘ C₂ ∘ C₁
  C₁ structure: goal category → fixed task template (ids task_0, task_1, ...)
  C₂ prompts:   one prompt template per task type
  C₃ strategy:  priority ≥ HIGH → ADAPTIVE, otherwise SEQUENTIAL

Templates chain each task to the one before it, so dependencies can only
point backwards and plans are acyclic by construction.
"""

from typing import Dict, List, Tuple

from seize_kernel.models.intent import Goal, GoalCategory, Priority
from seize_kernel.models.plan import ExecutionPlan, ExecutionStrategy, Task, TaskType
from seize_kernel.observability.logging import get_logger

logger = get_logger(__name__)


# (task type, description) per step, in emission order
TASK_TEMPLATES: Dict[GoalCategory, Tuple[Tuple[TaskType, str], ...]] = {
    GoalCategory.UNDERSTANDING: (
        (TaskType.FILE_READ, "情報収集"),
        (TaskType.ANALYSIS, "分析・理解"),
    ),
    GoalCategory.CODE_GENERATION: (
        (TaskType.FILE_READ, "既存コードの読み込み"),
        (TaskType.CODE_GENERATION, "コード生成"),
        (TaskType.VALIDATION, "検証"),
    ),
    GoalCategory.DECISION_SUPPORT: (
        (TaskType.FILE_READ, "情報収集"),
        (TaskType.ANALYSIS, "選択肢の分析"),
        (TaskType.DECISION, "意思決定記録の作成"),
    ),
}

PROMPT_TEMPLATES: Dict[TaskType, str] = {
    TaskType.FILE_READ: "以下のファイルを読み込んで分析してください:\n{description}",
    TaskType.FILE_WRITE: "以下の内容でファイルを作成してください:\n{description}",
    TaskType.CODE_GENERATION: "以下の要件に基づいてコードを生成してください:\n{description}",
    TaskType.VALIDATION: "以下の内容を検証してください:\n{description}",
    TaskType.ANALYSIS: "以下について分析してください:\n{description}",
    TaskType.DECISION: (
        "以下の意思決定を記録してください（目的・入力・選択肢・根拠を含む）:\n"
        "{description}"
    ),
}


class CommandStack:
    """Decomposes goals into execution plans. Stateless."""

    def decompose(self, goal: Goal) -> ExecutionPlan:
        """Run C₁, C₂ and C₃ in order."""
        tasks = self.structure_goal(goal)
        tasks = self.generate_prompts(tasks)
        strategy = self.determine_strategy(goal)

        plan = ExecutionPlan(goal=goal, tasks=tasks, strategy=strategy)
        logger.debug(
            "plan_decomposed",
            category=goal.category.value,
            tasks=[t.id for t in tasks],
            strategy=strategy.value,
        )
        return plan

    def structure_goal(self, goal: Goal) -> List[Task]:
        """C₁: build the task list for the goal's category."""
        template = TASK_TEMPLATES.get(goal.category)
        if template is None:
            # Categories without a template get a single analysis step
            template = ((TaskType.ANALYSIS, goal.description),)

        tasks = []
        for index, (task_type, description) in enumerate(template):
            dependencies = [tasks[index - 1].id] if index > 0 else []
            tasks.append(Task(
                id=f"task_{index}",
                description=description,
                type=task_type,
                dependencies=dependencies,
            ))
        return tasks

    def generate_prompts(self, tasks: List[Task]) -> List[Task]:
        """C₂: fill in each task's prompt from its type and description."""
        return [
            task.model_copy(update={"prompt": self.prompt_for(task)})
            for task in tasks
        ]

    def prompt_for(self, task: Task) -> str:
        return PROMPT_TEMPLATES[task.type].format(description=task.description)

    def determine_strategy(self, goal: Goal) -> ExecutionStrategy:
        """C₃: high-priority goals run adaptively."""
        if goal.priority >= Priority.HIGH:
            return ExecutionStrategy.ADAPTIVE
        return ExecutionStrategy.SEQUENTIAL
