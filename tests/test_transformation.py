"""Tests for the World Transformer and its six phases."""

from datetime import datetime

import pytest

from seize_kernel.command.stack import CommandStack
from seize_kernel.errors import TransformationError
from seize_kernel.governance.charter import CharterPolicy
from seize_kernel.models.intent import Goal, GoalCategory, Priority
from seize_kernel.models.transformation import TransformationPhase, TransformationResult
from seize_kernel.transformation import phases
from seize_kernel.transformation.phases import PIPELINE, PhaseContext
from seize_kernel.transformation.transformer import WorldTransformer
from seize_kernel.world_model.store import WorldModelStore, create_world

FIXED_NOW = datetime(2026, 10, 18, 9, 30, 0)


def _make_plan(
    category: GoalCategory = GoalCategory.UNDERSTANDING,
    priority: Priority = Priority.MEDIUM,
):
    goal = Goal(
        description="ファイルを読み込んで分析してください",
        essential_question="どのような情報を得て、何を実現したいのか?",
        category=category,
        priority=priority,
    )
    return CommandStack().decompose(goal)


class FailingCharter(CharterPolicy):
    """Charter whose decision record cannot be built."""

    def build_decision(self, plan, timestamp=None):
        raise RuntimeError("ledger unavailable")


class TestPipelineOrder:
    def test_fixed_phase_order(self):
        assert [phase for phase, _, _ in PIPELINE] == [
            TransformationPhase.UNDERSTAND,
            TransformationPhase.GENERATE,
            TransformationPhase.ALLOCATE,
            TransformationPhase.EXECUTE,
            TransformationPhase.INTEGRATE,
            TransformationPhase.LEARN,
        ]

    def test_only_last_three_mutate(self):
        assert [mutates for _, _, mutates in PIPELINE] == [
            False, False, False, True, True, True,
        ]

    def test_results_recorded_in_order(self):
        transformer = WorldTransformer(charter=CharterPolicy(), clock=lambda: FIXED_NOW)
        transformer.apply(_make_plan(), create_world())
        assert [r.phase for r in transformer.last_results] == [
            phase for phase, _, _ in PIPELINE
        ]
        assert all(r.success for r in transformer.last_results)


class TestReadOnlyPhases:
    def test_understand_summary(self):
        ctx = PhaseContext(_make_plan(), WorldModelStore(create_world()))
        result = phases.understand(ctx)
        assert result.artifacts == ["World Version: 0, Tasks: 2, Knowledge: 4 principles"]

    def test_generate_one_artifact_per_task(self):
        plan = _make_plan(GoalCategory.CODE_GENERATION)
        result = phases.generate(PhaseContext(plan, WorldModelStore()))
        assert len(result.artifacts) == 3
        assert result.artifacts[0] == f"Task task_0: {plan.tasks[0].prompt}"

    @pytest.mark.parametrize("priority, description", [
        (Priority.MEDIUM, "逐次実行"),
        (Priority.CRITICAL, "適応的実行"),
    ])
    def test_allocate_describes_strategy(self, priority, description):
        result = phases.allocate(PhaseContext(_make_plan(priority=priority), WorldModelStore()))
        assert result.artifacts == [description]

    def test_read_only_phases_leave_world_untouched(self):
        world = create_world()
        before = world.model_copy(deep=True)
        ctx = PhaseContext(_make_plan(), WorldModelStore(world))
        phases.understand(ctx)
        phases.generate(ctx)
        phases.allocate(ctx)
        assert world == before


class TestApply:
    def test_single_application(self):
        world = create_world()
        plan = _make_plan()
        transformer = WorldTransformer(charter=CharterPolicy(), clock=lambda: FIXED_NOW)

        result = transformer.apply(plan, world)

        assert result is world
        assert world.version == 1
        assert world.context.history == [
            "Executed: task_0 - 情報収集",
            "Executed: task_1 - 分析・理解",
        ]
        assert world.metadata["last_integration"] == "Integrated 2 artifacts into World v0"

        assert len(world.knowledge.learnings) == 1
        learning = world.knowledge.learnings[0]
        assert learning.confidence == 0.85
        assert learning.source == "UnifiedAgentFormula"
        assert learning.timestamp == FIXED_NOW
        assert learning.content == (
            "Goal: ファイルを読み込んで分析してください -> "
            "Result: Integrated 2 artifacts into World v0"
        )

        assert len(world.knowledge.decisions) == 1
        decision = world.knowledge.decisions[0]
        assert decision.purpose == plan.goal.description
        assert decision.options == ["情報収集", "分析・理解"]
        assert decision.approver == "System"

    def test_no_charter_no_decision(self):
        world = create_world()
        WorldTransformer().apply(_make_plan(), world)
        assert world.knowledge.decisions == []
        assert len(world.knowledge.learnings) == 1

    def test_repeated_application_appends(self):
        world = create_world()
        transformer = WorldTransformer(charter=CharterPolicy())
        transformer.apply(_make_plan(), world)
        first_history = list(world.context.history)
        first_learning = world.knowledge.learnings[0].model_copy()

        transformer.apply(_make_plan(GoalCategory.CODE_GENERATION), world)

        assert world.version == 2
        assert world.context.history[:2] == first_history
        assert len(world.context.history) == 5
        assert world.knowledge.learnings[0] == first_learning
        assert len(world.knowledge.decisions) == 2
        assert world.metadata["last_integration"] == "Integrated 3 artifacts into World v1"

    def test_principles_untouched(self):
        world = create_world()
        principles = world.knowledge.principles
        WorldTransformer(charter=CharterPolicy()).apply(_make_plan(), world)
        assert world.knowledge.principles == principles


class TestFailureRollback:
    def test_exception_in_execute_restores_world(self):
        world = create_world()
        world.context.history.append("earlier")
        before = world.model_copy(deep=True)

        with pytest.raises(TransformationError) as exc_info:
            WorldTransformer(charter=FailingCharter()).apply(_make_plan(), world)

        assert exc_info.value.phase == TransformationPhase.EXECUTE
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert world == before
        assert world.version == 0

    def test_unsuccessful_result_aborts(self, monkeypatch):
        def failing_learn(ctx):
            return TransformationResult(
                phase=TransformationPhase.LEARN,
                success=False,
                message="nothing learned",
            )

        patched = tuple(
            (phase, failing_learn if phase == TransformationPhase.LEARN else fn, mutates)
            for phase, fn, mutates in PIPELINE
        )
        monkeypatch.setattr(
            "seize_kernel.transformation.transformer.PIPELINE", patched
        )

        world = create_world()
        with pytest.raises(TransformationError) as exc_info:
            WorldTransformer(charter=CharterPolicy()).apply(_make_plan(), world)

        assert exc_info.value.phase == TransformationPhase.LEARN
        assert world.context.history == []
        assert world.knowledge.decisions == []
        assert world.metadata == {}
        assert world.version == 0
