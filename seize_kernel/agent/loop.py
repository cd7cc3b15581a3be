"""
Unified Agent — the agent loop.

    𝔸(Input, World₀) = lim_{n→∞} [∫₀ⁿ (Θ ∘ 𝒞 ∘ ℐ)(t) dt] = World_∞

States:
  START → (RESOLVE → PLAN → TRANSFORM → CHECK_CONVERGENCE) × n → DONE

The loop stops on convergence or after max_iterations, whichever comes
first. Errors from any stage abort the run; no partial result is returned.
"""

from typing import List, Optional
from uuid import uuid4

from seize_kernel.agent.convergence import ConvergencePolicy
from seize_kernel.command.stack import CommandStack
from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.intent.resolver import IntentResolver
from seize_kernel.models.agent import AgentConfig, AgentResult, ConvergenceCheck
from seize_kernel.models.world import World
from seize_kernel.observability.logging import (
    bind_run_context,
    clear_run_context,
    get_logger,
)
from seize_kernel.transformation.transformer import WorldTransformer
from seize_kernel.world_model.store import create_world

logger = get_logger(__name__)

FORMULA = "𝔸(Input, World₀) = lim_{n→∞} [∫₀ⁿ (Θ ∘ 𝒞 ∘ ℐ)(t) dt] = World_∞"

FORMULA_COMPONENTS = {
    "ℐ": "Intent Resolution — instruction → Goal",
    "𝒞": "Command Stack — Goal → ExecutionPlan (C₃ ∘ C₂ ∘ C₁)",
    "Θ": "World Transformation — θ₆ ∘ θ₅ ∘ θ₄ ∘ θ₃ ∘ θ₂ ∘ θ₁",
}


class UnifiedAgent:
    """
    Runs ℐ, 𝒞 and Θ repeatedly over one World until convergence.

    Components can be injected; otherwise they are built from the config.
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        intent_resolver: Optional[IntentResolver] = None,
        command_stack: Optional[CommandStack] = None,
        world_transformer: Optional[WorldTransformer] = None,
        convergence_policy: Optional[ConvergencePolicy] = None,
    ):
        self.config = config or AgentConfig()
        charter = CharterPolicy() if self.config.enforce_charter else None

        self.intent_resolver = intent_resolver or IntentResolver(
            charter=charter,
            allow_empty_input=self.config.allow_empty_input,
        )
        self.command_stack = command_stack or CommandStack()
        self.world_transformer = world_transformer or WorldTransformer(charter=charter)
        self.convergence_policy = convergence_policy or ConvergencePolicy(
            self.config.convergence_threshold
        )

    @property
    def max_iterations(self) -> int:
        return self.config.max_iterations

    @property
    def convergence_threshold(self) -> float:
        return self.convergence_policy.threshold

    def run(self, text: str, initial_world: Optional[World] = None) -> AgentResult:
        """
        Run the agent loop on an instruction.

        The caller's World is copied; `initial_world` in the result is that
        copy and `final_world` is the transformed one.
        """
        if initial_world is None:
            initial_world = create_world()
        initial = initial_world.model_copy(deep=True)
        world = initial.model_copy(deep=True)

        iterations = 0
        converged = False
        checks: List[ConvergenceCheck] = []
        warnings: List[str] = []

        run_id = f"run_{uuid4().hex[:12]}"
        bind_run_context(run_id=run_id)
        logger.info(
            "agent_started",
            instruction=text,
            max_iterations=self.max_iterations,
            threshold=self.convergence_threshold,
        )

        try:
            while iterations < self.max_iterations and not converged:
                iterations += 1
                bind_run_context(iteration=iterations)
                logger.info("iteration_started", of=self.max_iterations)

                # ℐ: always from the original instruction
                goal = self.intent_resolver.resolve(text, warnings=warnings)
                logger.info(
                    "goal_resolved",
                    description=goal.description,
                    essential_question=goal.essential_question,
                )

                # 𝒞
                plan = self.command_stack.decompose(goal)
                logger.info("plan_ready", tasks=len(plan.tasks), strategy=plan.strategy.value)

                # Θ
                world = self.world_transformer.apply(plan, world)

                check = self.convergence_policy.check(world, iterations)
                checks.append(check)
                converged = check.converged
                if converged:
                    logger.info("converged", reason=check.reason, score=check.score)
        finally:
            clear_run_context("run_id", "iteration")

        if not converged:
            logger.warning("max_iterations_reached", iterations=iterations)

        return AgentResult(
            initial_world=initial,
            final_world=world,
            iterations=iterations,
            converged=converged,
            convergence=checks,
            warnings=warnings,
        )

    def status(self) -> dict:
        """Describe the agent's configuration."""
        return {
            "max_iterations": self.max_iterations,
            "convergence_threshold": self.convergence_threshold,
            "enforce_charter": self.config.enforce_charter,
            "allow_empty_input": self.config.allow_empty_input,
        }
