"""Tests for the agent loop and its convergence policy."""

import pytest

from seize_kernel.agent.convergence import ConvergencePolicy
from seize_kernel.agent.loop import FORMULA, UnifiedAgent
from seize_kernel.errors import CharterViolationError, EmptyInputError, TransformationError
from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.models.agent import AgentConfig
from seize_kernel.models.world import Learning
from seize_kernel.transformation.transformer import WorldTransformer
from seize_kernel.world_model.store import create_world

READ_AND_ANALYZE = "ファイルを読み込んで分析してください"
# System design goals decompose into a single task
SINGLE_TASK = "新しいアーキテクチャを考える"


def _world_with_logs(history: int = 0, learnings: int = 0):
    world = create_world()
    world.context.history.extend(f"entry {i}" for i in range(history))
    for i in range(learnings):
        world.knowledge.learnings.append(Learning(
            timestamp="2026-01-01T00:00:00",
            content=f"learning {i}",
            source="test",
            confidence=0.5,
        ))
    return world


class TestConvergencePolicy:
    def test_log_growth_clause(self):
        check = ConvergencePolicy(0.8).check(_world_with_logs(4, 2), iteration=2)
        assert check.converged is True
        assert check.reason == "log_growth"

    def test_score_clause(self):
        # 5 / (3 * 2) = 0.833 >= 0.8, but learnings < iteration
        check = ConvergencePolicy(0.8).check(_world_with_logs(5, 1), iteration=2)
        assert check.converged is True
        assert check.reason == "score"
        assert check.score == pytest.approx(5 / 6)

    def test_not_converged(self):
        check = ConvergencePolicy(0.8).check(_world_with_logs(1, 1), iteration=1)
        assert check.converged is False
        assert check.reason == "not_converged"
        assert check.score == pytest.approx(1 / 3)

    def test_score_capped_at_one(self):
        check = ConvergencePolicy(0.8).check(_world_with_logs(30, 0), iteration=1)
        assert check.score == 1.0

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            ConvergencePolicy(1.5)
        with pytest.raises(ValueError):
            ConvergencePolicy(0.5).check(create_world(), iteration=0)


class TestUnifiedAgent:
    def test_read_and_analyze_scenario(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=10, convergence_threshold=0.8))
        result = agent.run(READ_AND_ANALYZE, create_world())

        assert result.converged is True
        assert result.iterations == 1
        assert result.final_world.version == 1
        assert result.final_world.context.history == [
            "Executed: task_0 - 情報収集",
            "Executed: task_1 - 分析・理解",
        ]
        assert len(result.final_world.knowledge.learnings) == 1
        assert len(result.final_world.knowledge.decisions) == 1
        assert result.convergence[0].reason == "log_growth"

    def test_default_world_when_none_given(self):
        result = UnifiedAgent().run(READ_AND_ANALYZE)
        assert result.initial_world.version == 0
        assert len(result.initial_world.knowledge.principles) == 4

    def test_initial_world_is_preserved(self):
        world = create_world()
        result = UnifiedAgent().run(READ_AND_ANALYZE, world)
        assert world.version == 0
        assert world.context.history == []
        assert result.initial_world == world
        assert result.initial_world is not world

    def test_single_task_plan_never_converges_at_default_threshold(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=4, convergence_threshold=0.8))
        result = agent.run(SINGLE_TASK, create_world())

        assert result.converged is False
        assert result.iterations == 4
        assert result.final_world.version == 4
        assert len(result.final_world.context.history) == 4
        assert [c.score for c in result.convergence] == pytest.approx([1 / 3] * 4)

    def test_single_task_plan_converges_at_low_threshold(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=4, convergence_threshold=0.3))
        result = agent.run(SINGLE_TASK, create_world())
        assert result.converged is True
        assert result.iterations == 1
        assert result.convergence[0].reason == "score"

    def test_prior_history_speeds_convergence(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=4, convergence_threshold=0.8))
        result = agent.run(SINGLE_TASK, _world_with_logs(history=5))
        assert result.converged is True
        assert result.iterations == 1

    @pytest.mark.parametrize("max_iterations", [1, 2, 7])
    def test_loop_bound(self, max_iterations):
        agent = UnifiedAgent(AgentConfig(max_iterations=max_iterations))
        result = agent.run(SINGLE_TASK, create_world())
        assert result.iterations == max_iterations
        assert len(result.convergence) == max_iterations

    def test_monotonic_version_and_append_only_logs(self):
        world = _world_with_logs(history=1, learnings=1)
        world.version = 3
        agent = UnifiedAgent(AgentConfig(max_iterations=3))
        result = agent.run(SINGLE_TASK, world)

        initial, final = result.initial_world, result.final_world
        assert final.version == initial.version + result.iterations
        assert final.context.history[:1] == initial.context.history
        assert final.knowledge.learnings[:1] == initial.knowledge.learnings
        assert len(final.knowledge.decisions) >= len(initial.knowledge.decisions)
        assert final.knowledge.principles == initial.knowledge.principles

    def test_convergence_soundness(self):
        threshold = 0.3
        agent = UnifiedAgent(AgentConfig(max_iterations=5, convergence_threshold=threshold))
        for text in (READ_AND_ANALYZE, SINGLE_TASK, "コードを実装する"):
            result = agent.run(text, create_world())
            for check in result.convergence:
                i = check.iteration
                expected = (
                    check.history_length >= 2 * i and check.learning_count >= i
                ) or min(1.0, check.history_length / (3 * i)) >= threshold
                assert check.converged == expected
            assert result.convergence[-1].converged == result.converged

    def test_charter_violation_aborts_without_mutation(self):
        world = create_world()
        before = world.model_copy(deep=True)
        with pytest.raises(CharterViolationError):
            UnifiedAgent().run("採用を自動判断してください", world)
        assert world == before

    def test_charter_disabled(self):
        agent = UnifiedAgent(AgentConfig(enforce_charter=False))
        result = agent.run("採用を自動判断してください", create_world())
        assert result.iterations >= 1
        assert result.final_world.knowledge.decisions == []

    def test_empty_input_aborts(self):
        with pytest.raises(EmptyInputError):
            UnifiedAgent().run("   ", create_world())

    def test_empty_input_allowed(self):
        agent = UnifiedAgent(AgentConfig(allow_empty_input=True, max_iterations=2))
        result = agent.run("", create_world())
        assert result.final_world.context.history[0] == "Executed: task_0 - 情報収集"

    def test_warnings_collected_per_iteration(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=3))
        result = agent.run("データ収集の仕組みを設計する", create_world())
        assert result.iterations == 3
        assert result.warnings == ["警告: 必要最小限のデータ収集を推奨します"] * 3

    def test_transformation_error_propagates(self):
        class FailingCharter(CharterPolicy):
            def build_decision(self, plan, timestamp=None):
                raise RuntimeError("boom")

        agent = UnifiedAgent(world_transformer=WorldTransformer(charter=FailingCharter()))
        with pytest.raises(TransformationError):
            agent.run(READ_AND_ANALYZE, create_world())

    def test_result_serializes(self):
        result = UnifiedAgent().run(READ_AND_ANALYZE, create_world())
        data = result.model_dump(mode="json")
        assert set(data) >= {"initial_world", "final_world", "iterations", "converged"}
        assert data["final_world"]["version"] == 1

    def test_status_and_formula(self):
        agent = UnifiedAgent(AgentConfig(max_iterations=5, convergence_threshold=0.5))
        assert agent.status() == {
            "max_iterations": 5,
            "convergence_threshold": 0.5,
            "enforce_charter": True,
            "allow_empty_input": False,
        }
        assert "Θ ∘ 𝒞 ∘ ℐ" in FORMULA
