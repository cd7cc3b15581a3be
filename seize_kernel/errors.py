"""Exceptions raised by the Seize Kernel. All of them abort an agent run."""

from typing import Optional

from seize_kernel.models.transformation import TransformationPhase


class SeizeError(Exception):
    """Base class for kernel errors."""
    pass


class EmptyInputError(SeizeError):
    """Raised when an instruction is empty after trimming."""
    pass


class CharterViolationError(SeizeError):
    """Raised when an instruction breaks a charter rule. No Goal is produced."""

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


class TransformationError(SeizeError):
    """Raised when a transformation phase fails. The World is left untouched."""

    def __init__(
        self,
        phase: TransformationPhase,
        message: str,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(f"Phase {phase.value} failed: {message}")
        self.phase = phase
        self.cause = cause


class UnsupportedFormatError(SeizeError):
    """Raised when a World rendering format is not known."""
    pass
