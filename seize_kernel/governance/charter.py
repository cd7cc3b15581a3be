"""
Charter Policy — the organizational charter applied to the agent loop.

Behavioral Contract:
- Evaluates raw instructions against fixed textual rules before a Goal exists
- HARD rules reject the instruction (CharterViolationError)
- ADVISORY rules never block; they are returned to the caller as warnings
- Builds the Decision Record the Execute phase appends for every plan
- Never modifies its own rules
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from seize_kernel.errors import CharterViolationError
from seize_kernel.models.plan import ExecutionPlan
from seize_kernel.models.world import Decision
from seize_kernel.observability.logging import get_logger

logger = get_logger(__name__)


class CharterRuleType(str, Enum):
    HARD = "hard"           # Never violate. Rejection is automatic.
    ADVISORY = "advisory"   # Reported on the warning channel only.


class CharterRule(BaseModel):
    """
    Fires when the instruction contains `trigger` but none of `unless`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: CharterRuleType
    trigger: str
    unless: Tuple[str, ...] = ()
    message: str

    def matches(self, text: str) -> bool:
        if self.trigger not in text:
            return False
        return not any(qualifier in text for qualifier in self.unless)


DEFAULT_CHARTER_RULES: Tuple[CharterRule, ...] = (
    CharterRule(
        name="human_final_judgement",
        type=CharterRuleType.HARD,
        trigger="自動判断",
        unless=("人間",),
        message="憲章違反: 最終判断は人間が行う必要があります",
    ),
    CharterRule(
        name="data_minimization",
        type=CharterRuleType.ADVISORY,
        trigger="データ収集",
        unless=("最小限",),
        message="警告: 必要最小限のデータ収集を推奨します",
    ),
)

DECISION_RATIONALE = "統一エージェント方程式に基づく自動実行"
DECISION_APPROVER = "System"
DECISION_REVOCATION_CONDITIONS = ("エラー発生時",)


class CharterPolicy:
    """
    The charter gate. Injected into the Intent Resolver (input validation)
    and the World Transformer (decision records).
    """

    def __init__(self, rules: Optional[Tuple[CharterRule, ...]] = None):
        self.rules = tuple(rules) if rules is not None else DEFAULT_CHARTER_RULES

    def validate_input(self, text: str) -> List[str]:
        """
        Check an instruction against every rule.

        Raises CharterViolationError on the first HARD rule that fires.
        Returns advisory messages otherwise.
        """
        advisories = []
        for rule in self.rules:
            if not rule.matches(text):
                continue
            if rule.type == CharterRuleType.HARD:
                logger.warning("charter_violation", rule=rule.name)
                raise CharterViolationError(rule.name, rule.message)
            logger.warning("charter_advisory", rule=rule.name, message=rule.message)
            advisories.append(rule.message)
        return advisories

    def build_decision(
        self,
        plan: ExecutionPlan,
        timestamp: Optional[datetime] = None,
    ) -> Decision:
        """One Decision Record summarizing a whole plan."""
        return Decision(
            timestamp=timestamp or datetime.utcnow(),
            purpose=plan.goal.description,
            input=plan.goal.essential_question,
            options=[task.description for task in plan.tasks],
            rationale=DECISION_RATIONALE,
            approver=DECISION_APPROVER,
            impact_scope=f"{len(plan.tasks)} tasks",
            alternatives=[],
            revocation_conditions=list(DECISION_REVOCATION_CONDITIONS),
        )
