"""
World Model Store — owns the World while it is being transformed.

Updated by: Execute, Integrate and Learn phases
Queried by: Understand phase + Agent Loop (convergence)

The store only ever appends to history, learnings and decisions, and the
principles tuple is fixed when the World is created.
"""

from typing import List, Optional, Tuple

from seize_kernel.models.world import (
    Decision,
    KnowledgeBase,
    Learning,
    Principle,
    PrincipleCategory,
    World,
)


def load_charter_principles() -> Tuple[Principle, ...]:
    """The organizational charter every new World starts with."""
    return (
        Principle(
            name="人間は判断する",
            description="AIは情報を示す。最終的な選択と責任は人間にある",
            category=PrincipleCategory.HUMAN,
        ),
        Principle(
            name="意図を持って問いを立てる",
            description="正しい答えよりも、正しい問いを生み出す力を尊ぶ",
            category=PrincipleCategory.HUMAN,
        ),
        Principle(
            name="公正と透明性",
            description="意思決定の記録を保存し、説明可能性を維持する",
            category=PrincipleCategory.ORGANIZATION,
        ),
        Principle(
            name="目的の明確化",
            description="利用前に「何を・なぜ・どのように」使うかを定義する",
            category=PrincipleCategory.AI_UTILIZATION,
        ),
    )


def create_world(working_directory: str = ".") -> World:
    """A version-0 World with the charter principles and empty logs."""
    world = World(knowledge=KnowledgeBase(principles=load_charter_principles()))
    world.context.working_directory = working_directory
    return world


class WorldModelStore:
    """
    Exclusive handle on a World for the duration of one transformation.
    """

    def __init__(self, world: Optional[World] = None):
        self._model = world if world is not None else create_world()

    @property
    def model(self) -> World:
        """Get the current world."""
        return self._model

    @property
    def version(self) -> int:
        return self._model.version

    @property
    def history(self) -> List[str]:
        return self._model.context.history

    def append_history(self, entry: str) -> None:
        """Append an entry to the execution history."""
        self._model.context.history.append(entry)

    def record_decision(self, decision: Decision) -> None:
        """Append a decision record."""
        self._model.knowledge.decisions.append(decision)

    def record_learning(self, learning: Learning) -> None:
        """Append a learning."""
        self._model.knowledge.learnings.append(learning)

    def set_metadata(self, key: str, value: str) -> None:
        """Insert or overwrite a metadata entry."""
        self._model.metadata[key] = value

    def advance(self) -> int:
        """Move the world to its next version and return it."""
        self._model.version += 1
        return self._model.version

    def snapshot(self) -> World:
        """Deep copy of the current world, used to roll back a failed iteration."""
        return self._model.model_copy(deep=True)

    def restore(self, snapshot: World) -> None:
        """
        Put the world back to a snapshot taken with snapshot().

        Fields are copied onto the existing object so that callers holding a
        reference to the World see the restored state.
        """
        for field_name in World.model_fields:
            setattr(self._model, field_name, getattr(snapshot, field_name))

    def get_state_snapshot(self) -> dict:
        """Get a serializable snapshot of the current world state."""
        return self._model.model_dump(mode="json")
