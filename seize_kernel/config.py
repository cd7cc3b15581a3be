"""Runtime settings loaded from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from seize_kernel.models.agent import AgentConfig


class Settings(BaseSettings):
    """Kernel settings. Every field can be overridden with a SEIZE_* variable."""

    model_config = SettingsConfigDict(env_prefix="SEIZE_", case_sensitive=False)

    max_iterations: int = Field(default=10, ge=1)
    convergence_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    enforce_charter: bool = True
    allow_empty_input: bool = False
    log_level: str = "INFO"
    log_format: str = "console"         # "console" | "json"

    def agent_config(self) -> AgentConfig:
        return AgentConfig(
            max_iterations=self.max_iterations,
            convergence_threshold=self.convergence_threshold,
            enforce_charter=self.enforce_charter,
            allow_empty_input=self.allow_empty_input,
        )
