"""Transformation phases and their per-phase results."""

from enum import Enum
from typing import List

from pydantic import BaseModel


class TransformationPhase(str, Enum):
    UNDERSTAND = "understand"   # θ₁
    GENERATE = "generate"       # θ₂
    ALLOCATE = "allocate"       # θ₃
    EXECUTE = "execute"         # θ₄
    INTEGRATE = "integrate"     # θ₅
    LEARN = "learn"             # θ₆


class TransformationResult(BaseModel):
    """Outcome of one phase of the World Transformer."""

    phase: TransformationPhase
    success: bool
    message: str
    artifacts: List[str] = []
