"""Tests for the built-in effects: move, attack and drawBeads."""

import pytest

from bead_tactics.ir.arenas import Position
from bead_tactics.ir.beads import BeadColor, BeadCounts
from bead_tactics.ir.events import AttackEvent, DamageEvent, MoveEvent, RestEvent
from bead_tactics.sim.core.battle_state import GameContext
from bead_tactics.sim.core.entities import Character, MonsterEntity
from bead_tactics.sim.core.grid import BattleGrid
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.effects import (
    AttackEffect,
    DrawBeadsEffect,
    EffectRegistry,
    EffectResult,
    MoveEffect,
)
from bead_tactics.sim.mechanics.dice import DiceRoller


@pytest.fixture
def grid() -> BattleGrid:
    g = BattleGrid(9, 9)
    g.register("hero-0", 1, 1)
    g.register("monster", 1, 2)
    return g


@pytest.fixture
def hero(grid) -> Character:
    character = Character("hero-0", 10, grid)
    character.initialize_bead_hand(BeadCounts(red=4), lambda: 0.0)
    return character


@pytest.fixture
def monster(grid) -> MonsterEntity:
    return MonsterEntity("monster", 12, grid)


@pytest.fixture
def context(grid, hero, monster) -> GameContext:
    entities = {hero.id: hero, monster.id: monster}
    return GameContext(grid, entities, "hero-0", DiceRoller(GameRNG(3)))


# ---------------------------------------------------------------------------
# MoveEffect
# ---------------------------------------------------------------------------

class TestMoveEffect:
    def test_moves_actor(self, context, grid):
        result = MoveEffect().execute(context, {"destination": Position(x=2, y=1)}, {}, {})

        assert result.success
        assert result.data["destination"] == Position(x=2, y=1)
        assert grid.get_position("hero-0") == Position(x=2, y=1)
        (event,) = result.events
        assert isinstance(event, MoveEvent)
        assert event.from_position == Position(x=1, y=1)

    def test_accepts_mapping_destination(self, context, grid):
        result = MoveEffect().execute(context, {"destination": {"x": 0, "y": 1}}, {}, {})
        assert result.success
        assert grid.get_position("hero-0") == Position(x=0, y=1)

    def test_explicit_actor(self, context, grid):
        result = MoveEffect().execute(
            context, {"destination": {"x": 2, "y": 2}, "actorId": "monster"}, {}, {},
        )
        assert result.success
        assert grid.get_position("monster") == Position(x=2, y=2)

    def test_occupied_fails_softly(self, context, grid):
        result = MoveEffect().execute(context, {"destination": {"x": 1, "y": 2}}, {}, {})

        assert not result.success
        assert result.reason == "Cannot move: occupied"
        assert result.events == []
        assert grid.get_position("hero-0") == Position(x=1, y=1)

    def test_unresolved_reference_fails_softly(self, context):
        result = MoveEffect().execute(context, {"destination": "$destination"}, {}, {})
        assert not result.success
        assert result.reason == "Invalid destination"

    def test_no_actor(self, grid):
        result = MoveEffect().execute(GameContext(grid, {}), {"destination": {"x": 0, "y": 0}}, {}, {})
        assert result.reason == "No actor"


# ---------------------------------------------------------------------------
# AttackEffect
# ---------------------------------------------------------------------------

class TestAttackEffect:
    def test_adjacent_attack(self, context, monster):
        result = AttackEffect().execute(
            context, {"targetEntity": "monster", "damage": 1, "actorId": "hero-0"}, {}, {},
        )

        assert result.success
        assert monster.current_health == 11
        attacks = [e for e in result.events if isinstance(e, AttackEvent)]
        damages = [e for e in result.events if isinstance(e, DamageEvent)]
        assert len(attacks) == 1 and len(damages) == 1
        assert damages[0].new_health == monster.current_health
        assert attacks[0].attacker_id == "hero-0"

    def test_damage_modifier_is_added(self, context, monster):
        result = AttackEffect().execute(
            context, {"targetEntity": "monster", "damage": 2}, {"damage": 3}, {},
        )
        assert result.data["damage"] == 5
        assert monster.current_health == 7

    def test_dice_damage(self, context, monster):
        result = AttackEffect().execute(context, {"targetEntity": "monster", "damage": "1d4"}, {}, {})
        assert 1 <= result.data["damage"] <= 4
        assert monster.current_health == 12 - result.data["damage"]

    def test_zero_sided_dice_deal_no_damage(self, context, monster):
        result = AttackEffect().execute(context, {"targetEntity": "monster", "damage": "1d0"}, {}, {})
        assert result.data["damage"] == 0
        assert monster.current_health == 12

    def test_default_damage_is_one(self, context, monster):
        AttackEffect().execute(context, {"targetEntity": "monster"}, {}, {})
        assert monster.current_health == 11

    def test_not_adjacent(self, context, grid, monster):
        grid.move_entity("monster", Position(x=5, y=5))
        result = AttackEffect().execute(context, {"targetEntity": "monster"}, {}, {})

        assert not result.success
        assert result.reason == "Target not adjacent"
        assert monster.current_health == 12

    @pytest.mark.parametrize("params, reason", [
        ({}, "No target"),
        ({"targetEntity": "$target"}, "No target"),
        ({"targetEntity": "ghost"}, "Target not found"),
    ])
    def test_missing_target(self, context, params, reason):
        result = AttackEffect().execute(context, params, {}, {})
        assert not result.success
        assert result.reason == reason
        assert result.events == []


# ---------------------------------------------------------------------------
# DrawBeadsEffect
# ---------------------------------------------------------------------------

class TestDrawBeadsEffect:
    def test_draws_into_actor_hand(self, context, hero):
        result = DrawBeadsEffect().execute(context, {"count": 2}, {}, {})

        assert result.success
        assert result.data == {"count": 2, "beads": [BeadColor.RED, BeadColor.RED]}
        assert hero.get_hand_counts() == BeadCounts(red=2)
        (event,) = result.events
        assert isinstance(event, RestEvent)
        assert event.entity_id == "hero-0"

    def test_count_modifier(self, context, hero):
        DrawBeadsEffect().execute(context, {"count": 1, "entityId": "hero-0"}, {"count": 2}, {})
        assert hero.get_hand_counts() == BeadCounts(red=3)

    def test_entity_without_hand(self, context):
        result = DrawBeadsEffect().execute(context, {"count": 1, "entityId": "monster"}, {}, {})
        assert not result.success

    def test_exhausted_bag_fails_softly(self, context):
        result = DrawBeadsEffect().execute(context, {"count": 5}, {}, {})
        assert not result.success
        assert result.events == []


# ---------------------------------------------------------------------------
# EffectRegistry
# ---------------------------------------------------------------------------

class TestEffectRegistry:
    def test_defaults(self):
        registry = EffectRegistry.with_defaults()
        assert set(registry.types) == {"move", "attack", "drawBeads"}
        assert isinstance(registry.get("attack"), AttackEffect)
        assert registry.get("teleport") is None

    def test_register_custom(self):
        class Nothing(MoveEffect):
            def execute(self, context, params, modifiers, chain_results):
                return EffectResult(success=True)

        registry = EffectRegistry()
        registry.register("nothing", Nothing())
        assert registry.has("nothing")
        assert not registry.has("move")
