"""Goal — the structured reframing of a free-text instruction."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class GoalCategory(str, Enum):
    UNDERSTANDING = "understanding"                         # Gather and understand information
    CODE_GENERATION = "code_generation"                     # Create or modify code
    SYSTEM_DESIGN = "system_design"
    ORGANIZATIONAL_MANAGEMENT = "organizational_management"
    DECISION_SUPPORT = "decision_support"


class Priority(str, Enum):
    """Goal priority. Ordered: LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}


class Goal(BaseModel):
    """Created once per iteration by the Intent Resolver. Immutable."""

    model_config = ConfigDict(frozen=True)

    description: str
    essential_question: str             # Step-back question behind the request
    category: GoalCategory
    priority: Priority
    constraints: List[str] = []
