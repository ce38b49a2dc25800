"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from bead_tactics.ir.actions import EntityPrompt, OptionPrompt, TilePrompt
from bead_tactics.ir.arenas import Position
from bead_tactics.ir.events import AnimationEvent
from bead_tactics.sim.adapter import BattleAdapter
from bead_tactics.sim.builder import BattleBuilder
from bead_tactics.sim.content.registry import ContentRegistry
from bead_tactics.sim.content.sample import SAMPLE_ARENA_ID, SAMPLE_MONSTER_ID
from bead_tactics.sim.core.battle_state import BattleState
from bead_tactics.sim.core.rng import GameRNG


class ScriptedAdapter(BattleAdapter):
    """Answers prompts from fixed queues and records everything else.

    An empty prompt queue answers ``None`` (cancel).  An empty action queue
    answers *default_action*, or fails the test if there is none.
    """

    def __init__(
        self,
        actions: list[str] | None = None,
        tiles: list[Any] | None = None,
        entities: list[str | None] | None = None,
        options: list[list[str] | None] | None = None,
        default_action: str | None = None,
    ) -> None:
        self.actions = list(actions or [])
        self.tiles = list(tiles or [])
        self.entities = list(entities or [])
        self.options = list(options or [])
        self.default_action = default_action

        self.prompts: list[TilePrompt | EntityPrompt | OptionPrompt] = []
        self.animated: list[AnimationEvent] = []
        self.messages: list[str] = []
        self.delays: list[int] = []
        self.turns_shown: list[str] = []
        self.transitions: list[tuple[str, dict[str, Any]]] = []

    async def prompt_tile(self, prompt: TilePrompt) -> Position | None:
        self.prompts.append(prompt)
        return self.tiles.pop(0) if self.tiles else None

    async def prompt_entity(self, prompt: EntityPrompt) -> str | None:
        self.prompts.append(prompt)
        return self.entities.pop(0) if self.entities else None

    async def prompt_options(self, prompt: OptionPrompt) -> list[str] | None:
        self.prompts.append(prompt)
        return self.options.pop(0) if self.options else None

    async def await_player_action(self, actor_id: str) -> str:
        if self.actions:
            return self.actions.pop(0)
        if self.default_action is None:
            pytest.fail(f"No scripted action left for {actor_id}")
        return self.default_action

    async def animate(self, events: list[AnimationEvent]) -> None:
        self.animated.extend(events)

    async def delay(self, ms: int) -> None:
        self.delays.append(ms)

    def log(self, message: str) -> None:
        self.messages.append(message)

    def show_player_turn(self, actor_id: str) -> None:
        self.turns_shown.append(actor_id)

    def transition(self, scene: str, data: dict[str, Any]) -> None:
        self.transitions.append((scene, data))


@pytest.fixture(scope="module")
def registry() -> ContentRegistry:
    """Module-scoped registry with the sample content loaded once."""
    reg = ContentRegistry()
    reg.load_sample_content()
    return reg


@pytest.fixture
def make_state(registry: ContentRegistry) -> Callable[..., BattleState]:
    """Factory for sample battles: ``make_state(party_size=1, seed=42)``."""

    def _make(party_size: int = 1, seed: int = 42) -> BattleState:
        return (
            BattleBuilder()
            .with_monster(registry.get_monster(SAMPLE_MONSTER_ID))
            .with_arena(registry.get_arena(SAMPLE_ARENA_ID))
            .with_classes(registry.get_all_classes())
            .with_actions(registry.get_all_actions())
            .with_party_size(party_size)
            .with_rng(GameRNG(seed))
            .build()
        )

    return _make


@pytest.fixture
def scripted() -> type[ScriptedAdapter]:
    """The :class:`ScriptedAdapter` class, for tests to instantiate."""
    return ScriptedAdapter
