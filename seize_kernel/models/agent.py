"""Agent configuration and run results."""

from typing import List

from pydantic import BaseModel, Field

from seize_kernel.models.world import World


class AgentConfig(BaseModel):
    """Configuration for the Agent Loop."""

    max_iterations: int = Field(ge=1, default=10)
    convergence_threshold: float = Field(ge=0.0, le=1.0, default=0.8)
    enforce_charter: bool = True
    allow_empty_input: bool = False


class ConvergenceCheck(BaseModel):
    """The convergence evaluation recorded after one iteration."""

    iteration: int
    history_length: int
    learning_count: int
    score: float                        # min(1, history / (3 * iteration))
    converged: bool
    reason: str                         # "log_growth" | "score" | "not_converged"


class AgentResult(BaseModel):
    """Outcome of a complete agent run."""

    initial_world: World
    final_world: World
    iterations: int
    converged: bool
    convergence: List[ConvergenceCheck] = []
    warnings: List[str] = []
