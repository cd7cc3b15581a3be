"""World Model — the versioned state carried across agent iterations."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PrincipleCategory(str, Enum):
    HUMAN = "human"                     # Human declarations
    ORGANIZATION = "organization"       # Organizational purpose
    BEHAVIORAL = "behavioral"           # Behavioral guidelines
    AI_UTILIZATION = "ai_utilization"   # Principles for AI use


class Principle(BaseModel):
    """A charter principle. Loaded once when a World is created."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: PrincipleCategory


class Learning(BaseModel):
    """A learned insight appended by the Learn phase."""

    timestamp: datetime
    content: str
    source: str
    confidence: float = Field(ge=0.0, le=1.0)


class Decision(BaseModel):
    """
    Decision Record — what was decided, on what input, and who approved it.

    Appended by the Execute phase when charter enforcement is active.
    """

    timestamp: datetime
    purpose: str
    input: str
    options: List[str] = []
    rationale: str
    approver: str
    impact_scope: str
    alternatives: List[str] = []
    revocation_conditions: List[str] = []


class ExecutionContext(BaseModel):
    """Where the agent runs and what it has done so far."""

    working_directory: str = "."
    environment: Dict[str, str] = {}
    history: List[str] = []             # Append-only


class KnowledgeBase(BaseModel):
    """Principles plus the append-only learning and decision logs."""

    principles: Tuple[Principle, ...] = ()
    learnings: List[Learning] = []
    decisions: List[Decision] = []


class World(BaseModel):
    """The agent's state. `version` counts completed transformations."""

    version: int = Field(ge=0, default=0)
    filesystem: Dict[str, str] = {}
    context: ExecutionContext = Field(default_factory=ExecutionContext)
    knowledge: KnowledgeBase = Field(default_factory=KnowledgeBase)
    metadata: Dict[str, str] = {}
