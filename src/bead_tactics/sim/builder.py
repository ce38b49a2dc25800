"""Battle construction.

:class:`BattleBuilder` turns content definitions into a live
:class:`~bead_tactics.sim.core.battle_state.BattleState`::

    state = (
        BattleBuilder()
        .with_monster(registry.get_monster("ogre"))
        .with_arena(registry.get_arena("pit"))
        .with_classes([registry.get_class("knight")])
        .with_actions(registry.get_all_actions())
        .with_rng(GameRNG(42))
        .build()
    )
"""

from __future__ import annotations

import logging
from typing import Iterable

from bead_tactics.ir.actions import ActionDefinition
from bead_tactics.ir.arenas import ArenaDefinition, Position
from bead_tactics.ir.characters import CharacterClass
from bead_tactics.ir.monsters import MonsterDefinition
from bead_tactics.sim.actions import ActionRegistry
from bead_tactics.sim.core.action_wheel import ActionWheel
from bead_tactics.sim.core.battle_state import BattleState
from bead_tactics.sim.core.entities import Character, MonsterEntity
from bead_tactics.sim.core.grid import BattleGrid
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.effects.registry import EffectRegistry
from bead_tactics.sim.mechanics.dice import DiceRoller
from bead_tactics.sim.observer import BattleStateObserver
from bead_tactics.sim.turns import TurnController

logger = logging.getLogger(__name__)

MONSTER_ID = "monster"

_DEFAULT_PARTY_SIZE = 4
_STARTING_HAND_SIZE = 3
_DEFAULT_PLAYER_SPAWNS: tuple[Position, ...] = (
    Position(x=1, y=1),
    Position(x=2, y=1),
    Position(x=1, y=2),
    Position(x=2, y=2),
)
_DEFAULT_MONSTER_SPAWN = Position(x=5, y=4)


def hero_id(index: int) -> str:
    return f"hero-{index}"


class BattleBuilder:
    """Fluent builder for a single battle.

    Monster, arena and at least one class are required.  Heroes cycle
    through the given classes in order.
    """

    def __init__(self) -> None:
        self._monster: MonsterDefinition | None = None
        self._arena: ArenaDefinition | None = None
        self._classes: list[CharacterClass] = []
        self._actions: list[ActionDefinition] = []
        self._party_size = _DEFAULT_PARTY_SIZE
        self._rng: GameRNG | None = None
        self._effect_registry: EffectRegistry | None = None

    # -- configuration -------------------------------------------------------

    def with_monster(self, monster: MonsterDefinition) -> BattleBuilder:
        self._monster = monster
        return self

    def with_arena(self, arena: ArenaDefinition) -> BattleBuilder:
        self._arena = arena
        return self

    def with_classes(self, classes: Iterable[CharacterClass]) -> BattleBuilder:
        self._classes = list(classes)
        return self

    def with_actions(self, actions: Iterable[ActionDefinition]) -> BattleBuilder:
        self._actions = list(actions)
        return self

    def with_party_size(self, size: int) -> BattleBuilder:
        self._party_size = size
        return self

    def with_rng(self, rng: GameRNG) -> BattleBuilder:
        """Seed every random source of the battle from *rng*."""
        self._rng = rng
        return self

    def with_effect_registry(self, registry: EffectRegistry) -> BattleBuilder:
        """Use *registry* instead of the three built-in effects."""
        self._effect_registry = registry
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> BattleState:
        """Assemble the battle.

        Raises
        ------
        ValueError
            If monster, arena or classes are missing, the party size is not
            positive, the arena has fewer player spawns than heroes, or two
            entities would spawn on the same cell.
        """
        if self._monster is None:
            raise ValueError("BattleBuilder: monster is required")
        if self._arena is None:
            raise ValueError("BattleBuilder: arena is required")
        if not self._classes:
            raise ValueError("BattleBuilder: classes are required")
        if self._party_size < 1:
            raise ValueError(f"BattleBuilder: party size must be >= 1, got {self._party_size}")

        spawns = list(self._arena.player_spawns or _DEFAULT_PLAYER_SPAWNS)
        if len(spawns) < self._party_size:
            raise ValueError(
                f"BattleBuilder: arena {self._arena.id!r} has {len(spawns)} player "
                f"spawns for a party of {self._party_size}"
            )

        rng = self._rng or GameRNG()
        grid = BattleGrid(self._arena.width, self._arena.height)

        effect_registry = self._effect_registry or EffectRegistry.with_defaults()
        action_registry = ActionRegistry(effect_registry)
        action_registry.register_all(self._actions)

        characters = self._create_characters(grid, spawns, action_registry, rng)
        monster = self._create_monster(grid, rng)
        wheel = self._create_wheel(characters, monster)

        state = BattleState(
            arena=self._arena,
            monster_definition=self._monster,
            classes=self._classes,
            actions=self._actions,
            grid=grid,
            wheel=wheel,
            characters=characters,
            monster=monster,
            action_registry=action_registry,
            effect_registry=effect_registry,
            turn_controller=TurnController(wheel, monster, characters),
            observer=BattleStateObserver(),
            dice=DiceRoller(rng.fork("dice")),
            rng=rng,
        )
        action_registry.bind_context(state.create_game_context)

        logger.debug("Built %r", state)
        return state

    # -- internal helpers ----------------------------------------------------

    def _create_characters(
        self,
        grid: BattleGrid,
        spawns: list[Position],
        action_registry: ActionRegistry,
        rng: GameRNG,
    ) -> list[Character]:
        characters: list[Character] = []
        for i in range(self._party_size):
            char_class = self._classes[i % len(self._classes)]
            character_id = hero_id(i)
            spawn = spawns[i]
            grid.register(character_id, spawn.x, spawn.y)

            character = Character(
                character_id, char_class.stats.health, grid, action_registry,
            )
            character.set_innate_actions(char_class.innate_actions)
            for equipment in char_class.equipment:
                character.equip(equipment)

            bead_rng = rng.fork(f"beads:{character_id}")
            character.initialize_bead_hand(char_class.beads, bead_rng.random_float)
            character.draw_beads_to_hand(_STARTING_HAND_SIZE)

            characters.append(character)
        return characters

    def _create_monster(self, grid: BattleGrid, rng: GameRNG) -> MonsterEntity:
        definition = self._monster
        spawn = self._arena.monster_spawn or _DEFAULT_MONSTER_SPAWN
        grid.register(MONSTER_ID, spawn.x, spawn.y)

        monster = MonsterEntity(MONSTER_ID, definition.stats.health, grid)
        if definition.has_bead_ai:
            bead_rng = rng.fork(f"beads:{MONSTER_ID}")
            monster.initialize_bead_bag(definition.beads, bead_rng.random_float)
            monster.initialize_state_machine(
                definition.state_definitions(), definition.start_state,
            )
        return monster

    @staticmethod
    def _create_wheel(characters: list[Character], monster: MonsterEntity) -> ActionWheel:
        wheel = ActionWheel()
        for character in characters:
            wheel.add_entity(character.id, 0)
        wheel.add_entity(monster.id, 0)
        return wheel
