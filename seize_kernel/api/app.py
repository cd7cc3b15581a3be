"""
Seize Kernel API — FastAPI endpoints.

Exposes the agent loop and its stages via a REST API for:
- Running the agent on an instruction
- Resolving intents and decomposing goals in isolation
- Inspecting the initial World
- Agent status and the unified agent formula
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from seize_kernel.agent.loop import FORMULA, FORMULA_COMPONENTS, UnifiedAgent
from seize_kernel.config import Settings
from seize_kernel.errors import (
    CharterViolationError,
    EmptyInputError,
    TransformationError,
    UnsupportedFormatError,
)
from seize_kernel.models.agent import AgentConfig
from seize_kernel.models.world import World
from seize_kernel.observability.logging import get_logger, setup_logging
from seize_kernel.world_model.store import create_world

logger = get_logger(__name__)


# --- Request/Response Models ---

class RunRequest(BaseModel):
    input: str
    max_iterations: Optional[int] = Field(default=None, ge=1)
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class InstructionRequest(BaseModel):
    input: str


def render_world(world: World, fmt: str):
    """Render a World as a JSON document or a human-readable summary."""
    if fmt == "json":
        return world.model_dump(mode="json")
    if fmt == "pretty":
        lines = [
            f"World v{world.version}",
            f"Working directory: {world.context.working_directory}",
            f"Principles ({len(world.knowledge.principles)}):",
        ]
        for principle in world.knowledge.principles:
            lines.append(f"  - {principle.name}: {principle.description}")
        lines.append(f"History: {len(world.context.history)} entries")
        lines.append(f"Learnings: {len(world.knowledge.learnings)}")
        lines.append(f"Decisions: {len(world.knowledge.decisions)}")
        return "\n".join(lines)
    raise UnsupportedFormatError(f"Unsupported format: {fmt} (expected json or pretty)")


def _to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, (EmptyInputError, UnsupportedFormatError)):
        return HTTPException(400, str(error))
    if isinstance(error, CharterViolationError):
        return HTTPException(422, {"rule": error.rule, "detail": str(error)})
    if isinstance(error, TransformationError):
        return HTTPException(500, {"phase": error.phase.value, "detail": str(error)})
    return HTTPException(500, str(error))


# --- Application Factory ---

def create_app(
    config: Optional[AgentConfig] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_format)
    base_config = config or settings.agent_config()

    app = FastAPI(
        title="Seize Kernel API",
        description="Unified agent loop — intent, command stack, world transformation",
        version="0.1.0",
    )

    agent = UnifiedAgent(base_config)
    app.state.agent = agent

    # === AGENT ===

    @app.post("/agent/run")
    def run_agent(req: RunRequest):
        """Run the agent loop on a fresh World."""
        run_config = base_config.model_copy(update={
            k: v for k, v in {
                "max_iterations": req.max_iterations,
                "convergence_threshold": req.threshold,
            }.items() if v is not None
        })
        runner = agent if run_config == base_config else UnifiedAgent(run_config)
        try:
            result = runner.run(req.input, create_world())
        except (EmptyInputError, CharterViolationError, TransformationError) as e:
            logger.warning("agent_run_rejected", error=str(e))
            raise _to_http_error(e)
        return result.model_dump(mode="json")

    @app.get("/agent/status")
    def agent_status():
        """Current agent configuration."""
        return agent.status()

    @app.get("/agent/formula")
    def agent_formula():
        """The unified agent formula and its components."""
        return {"formula": FORMULA, "components": FORMULA_COMPONENTS}

    # === STAGES ===

    @app.post("/intent/resolve")
    def resolve_intent(req: InstructionRequest):
        """Resolve an instruction into a Goal (ℐ only)."""
        warnings = []
        try:
            goal = agent.intent_resolver.resolve(req.input, warnings=warnings)
        except (EmptyInputError, CharterViolationError) as e:
            raise _to_http_error(e)
        return {"goal": goal.model_dump(mode="json"), "warnings": warnings}

    @app.post("/plan/decompose")
    def decompose_plan(req: InstructionRequest):
        """Resolve an instruction and decompose it into a plan (𝒞 ∘ ℐ)."""
        try:
            goal = agent.intent_resolver.resolve(req.input)
        except (EmptyInputError, CharterViolationError) as e:
            raise _to_http_error(e)
        plan = agent.command_stack.decompose(goal)
        return plan.model_dump(mode="json")

    # === WORLD ===

    @app.get("/world/init")
    def init_world(format: str = "json"):
        """The initial World every run starts from."""
        try:
            rendered = render_world(create_world(), format)
        except UnsupportedFormatError as e:
            raise _to_http_error(e)
        if isinstance(rendered, str):
            return PlainTextResponse(rendered)
        return rendered

    return app


# Default application instance
app = create_app()
