"""Tests for BattleBuilder -- assembling a battle from content."""

import pytest

from bead_tactics.ir.arenas import ArenaDefinition, Position
from bead_tactics.ir.monsters import MonsterDefinition
from bead_tactics.sim.builder import MONSTER_ID, BattleBuilder
from bead_tactics.sim.content.sample import SAMPLE_ARENA_ID, SAMPLE_MONSTER_ID
from bead_tactics.sim.core.rng import GameRNG


def _builder(registry) -> BattleBuilder:
    return (
        BattleBuilder()
        .with_monster(registry.get_monster(SAMPLE_MONSTER_ID))
        .with_arena(registry.get_arena(SAMPLE_ARENA_ID))
        .with_classes(registry.get_all_classes())
        .with_actions(registry.get_all_actions())
        .with_rng(GameRNG(1))
    )


class TestBuild:
    def test_default_party(self, registry):
        state = _builder(registry).build()

        assert [c.id for c in state.characters] == ["hero-0", "hero-1", "hero-2", "hero-3"]
        assert state.monster.id == MONSTER_ID
        assert len(state.wheel) == 5
        assert all(state.wheel.get_position(e.id) == 0 for e in state.wheel.get_all_entities())
        assert state.wheel.get_next_actor() == "hero-0"

    def test_spawns_from_arena(self, registry):
        state = _builder(registry).with_party_size(2).build()

        assert state.grid.get_position("hero-0") == Position(x=1, y=1)
        assert state.grid.get_position("hero-1") == Position(x=2, y=1)
        assert state.grid.get_position(MONSTER_ID) == Position(x=5, y=4)

    def test_heroes_get_class_stats_and_hand(self, registry):
        state = _builder(registry).with_party_size(1).build()
        hero = state.characters[0]

        assert hero.max_health == 10
        assert hero.get_available_action_ids() == ["move", "run", "attack", "rest"]
        assert hero.bead_hand.hand_total == 3
        assert hero.bead_hand.bag_total == 9

    def test_monster_ai_is_wired(self, registry):
        state = _builder(registry).build()

        assert state.monster.has_bead_bag
        assert state.monster.state_machine.current_state_name == "idle"
        assert state.monster.get_bag_counts().total == 8

    def test_same_seed_same_battle(self, registry):
        a = _builder(registry).build()
        b = _builder(registry).build()
        for hero_a, hero_b in zip(a.characters, b.characters):
            assert hero_a.get_hand_counts() == hero_b.get_hand_counts()

    def test_context_factory_is_bound(self, registry):
        state = _builder(registry).build()
        context = state.create_game_context("hero-2")

        assert context.actor_id == "hero-2"
        assert context.get_entity(MONSTER_ID) is state.monster
        assert context.get_bead_hand("hero-2") is state.get_character("hero-2").bead_hand
        assert context.get_bead_hand(MONSTER_ID) is None
        assert state.action_registry.get_action("move") is not None

    def test_monster_without_ai(self, registry):
        plain = MonsterDefinition(id="dummy", name="Dummy", stats={"health": 3})
        state = _builder(registry).with_monster(plain).build()

        assert not state.monster.has_bead_bag
        assert state.monster.decide_turn(state.characters).type == "idle"

    def test_default_spawns(self, registry):
        arena = ArenaDefinition(id="open", name="Open", width=8, height=8)
        state = _builder(registry).with_arena(arena).build()

        assert state.grid.get_position("hero-3") == Position(x=2, y=2)
        assert state.grid.get_position(MONSTER_ID) == Position(x=5, y=4)


class TestBuildErrors:
    def test_monster_required(self, registry):
        builder = BattleBuilder().with_arena(registry.get_arena(SAMPLE_ARENA_ID))
        with pytest.raises(ValueError, match="monster is required"):
            builder.build()

    def test_arena_required(self, registry):
        builder = BattleBuilder().with_monster(registry.get_monster(SAMPLE_MONSTER_ID))
        with pytest.raises(ValueError, match="arena is required"):
            builder.build()

    def test_classes_required(self, registry):
        builder = _builder(registry).with_classes([])
        with pytest.raises(ValueError, match="classes are required"):
            builder.build()

    def test_party_size_positive(self, registry):
        with pytest.raises(ValueError, match="party size"):
            _builder(registry).with_party_size(0).build()

    def test_not_enough_spawns(self, registry):
        with pytest.raises(ValueError, match="player spawns"):
            _builder(registry).with_party_size(5).build()

    def test_monster_spawn_on_player_spawn(self, registry):
        arena = ArenaDefinition(
            id="cramped", name="Cramped", width=4, height=4,
            player_spawns=[Position(x=0, y=0)], monster_spawn=Position(x=0, y=0),
        )
        with pytest.raises(ValueError, match="already held"):
            _builder(registry).with_arena(arena).with_party_size(1).build()
