"""
Intent Resolver — ℐ: free-text instruction → Goal.

Classification is a deterministic scan over ordered marker tables. The
tables are plain data (IntentRules) so they can be swapped and tested
without touching the resolution flow:

  question:    first matching rule wins, else a generic step-back question
  category:    first matching rule wins, else UNDERSTANDING
  priority:    first matching rule wins, else MEDIUM
  constraints: every matching rule contributes, in table order
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from seize_kernel.errors import EmptyInputError
from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.models.intent import Goal, GoalCategory, Priority
from seize_kernel.observability.logging import get_logger

logger = get_logger(__name__)


class MarkerRule(BaseModel):
    """Maps any of `markers` (substring match) to `result`."""

    model_config = ConfigDict(frozen=True)

    markers: Tuple[str, ...]
    result: Any

    def matches(self, text: str) -> bool:
        return any(marker in text for marker in self.markers)


class IntentRules(BaseModel):
    """The complete marker vocabulary used by the resolver."""

    model_config = ConfigDict(frozen=True)

    question_rules: Tuple[MarkerRule, ...]
    default_question: str
    category_rules: Tuple[MarkerRule, ...]
    default_category: GoalCategory = GoalCategory.UNDERSTANDING
    priority_rules: Tuple[MarkerRule, ...]
    default_priority: Priority = Priority.MEDIUM
    constraint_rules: Tuple[MarkerRule, ...] = ()


DEFAULT_INTENT_RULES = IntentRules(
    question_rules=(
        MarkerRule(markers=("読み込", "取得"), result="どのような情報を得て、何を実現したいのか?"),
        MarkerRule(markers=("修正", "変更"), result="この変更によって何を達成したいのか?"),
        MarkerRule(markers=("作成", "生成"), result="なぜこれが必要で、どのような価値を生むのか?"),
    ),
    default_question="この要求の本質的な目的は何か?",
    category_rules=(
        MarkerRule(markers=("理解", "調査", "確認"), result=GoalCategory.UNDERSTANDING),
        MarkerRule(markers=("コード", "実装", "修正"), result=GoalCategory.CODE_GENERATION),
        MarkerRule(markers=("設計", "アーキテクチャ"), result=GoalCategory.SYSTEM_DESIGN),
        MarkerRule(markers=("組織", "運営"), result=GoalCategory.ORGANIZATIONAL_MANAGEMENT),
        MarkerRule(markers=("判断", "決定"), result=GoalCategory.DECISION_SUPPORT),
    ),
    priority_rules=(
        MarkerRule(markers=("緊急", "至急"), result=Priority.CRITICAL),
        MarkerRule(markers=("重要", "優先"), result=Priority.HIGH),
        MarkerRule(markers=("後で", "余裕"), result=Priority.LOW),
    ),
    constraint_rules=(
        MarkerRule(markers=("安全",), result="安全性を確保すること"),
        MarkerRule(markers=("説明",), result="説明可能性を維持すること"),
        MarkerRule(markers=("記録",), result="プロセスを記録すること"),
    ),
)


def first_match(rules: Tuple[MarkerRule, ...], text: str, default: Any) -> Any:
    """Result of the first rule whose markers occur in text, else default."""
    for rule in rules:
        if rule.matches(text):
            return rule.result
    return default


def all_matches(rules: Tuple[MarkerRule, ...], text: str) -> List[Any]:
    """Results of every matching rule, in table order."""
    return [rule.result for rule in rules if rule.matches(text)]


class IntentResolver:
    """
    Turns an instruction into a Goal.

    With a CharterPolicy attached, instructions that break a HARD charter
    rule are refused before any Goal is produced.
    """

    def __init__(
        self,
        charter: Optional[CharterPolicy] = None,
        rules: Optional[IntentRules] = None,
        allow_empty_input: bool = False,
    ):
        self.charter = charter
        self.rules = rules or DEFAULT_INTENT_RULES
        self.allow_empty_input = allow_empty_input

    def resolve(self, text: str, warnings: Optional[List[str]] = None) -> Goal:
        """
        Resolve an instruction into a Goal.

        Charter advisories are appended to `warnings` when a list is given.
        Raises EmptyInputError or CharterViolationError.
        """
        description = text.strip()
        if not description and not self.allow_empty_input:
            raise EmptyInputError("Instruction is empty after trimming whitespace.")

        if self.charter is not None:
            advisories = self.charter.validate_input(description)
            if warnings is not None:
                warnings.extend(advisories)

        goal = Goal(
            description=description,
            essential_question=self.step_back_question(description),
            category=self.infer_category(description),
            priority=self.determine_priority(description),
            constraints=self.extract_constraints(description),
        )
        logger.debug(
            "intent_resolved",
            category=goal.category.value,
            priority=goal.priority.value,
            constraints=len(goal.constraints),
        )
        return goal

    def step_back_question(self, text: str) -> str:
        """The more essential question behind a surface request."""
        return first_match(
            self.rules.question_rules, text, self.rules.default_question
        )

    def infer_category(self, text: str) -> GoalCategory:
        return first_match(
            self.rules.category_rules, text, self.rules.default_category
        )

    def determine_priority(self, text: str) -> Priority:
        return first_match(
            self.rules.priority_rules, text, self.rules.default_priority
        )

    def extract_constraints(self, text: str) -> List[str]:
        return all_matches(self.rules.constraint_rules, text)
