"""Battle state for the bead-tactics simulator.

``BattleState`` is the handoff from :class:`~bead_tactics.sim.builder.BattleBuilder`
to the turn loop: every mutable system of a single encounter plus the
configuration it was built from.  ``GameContext`` is the narrow view of that
state handed to effects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from bead_tactics.ir.actions import ActionDefinition
from bead_tactics.ir.arenas import ArenaDefinition
from bead_tactics.ir.characters import CharacterClass
from bead_tactics.ir.monsters import MonsterDefinition
from bead_tactics.sim.core.action_wheel import ActionWheel
from bead_tactics.sim.core.entities import Character, Entity, MonsterEntity
from bead_tactics.sim.core.grid import BattleGrid
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.mechanics.beads import PlayerBeadSystem
from bead_tactics.sim.mechanics.dice import DiceRoller

if TYPE_CHECKING:
    from bead_tactics.sim.actions import ActionRegistry
    from bead_tactics.sim.effects.registry import EffectRegistry
    from bead_tactics.sim.observer import BattleStateObserver
    from bead_tactics.sim.turns import TurnController


# ---------------------------------------------------------------------------
# GameContext
# ---------------------------------------------------------------------------

class GameContext:
    """What an effect may see and touch while it executes.

    Parameters
    ----------
    grid:
        The battle grid.  Effects move entities through it.
    entities:
        Entity id -> entity.  Not owned; the mapping is read live.
    actor_id:
        The entity performing the current action, if any.
    dice:
        Roller for dice-notation params.  A fresh unseeded roller when
        omitted.
    """

    def __init__(
        self,
        grid: BattleGrid,
        entities: Mapping[str, Entity],
        actor_id: str | None = None,
        dice: DiceRoller | None = None,
    ) -> None:
        self.grid = grid
        self.actor_id = actor_id
        self.dice = dice or DiceRoller()
        self._entities = entities

    def get_entity(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def get_bead_hand(self, entity_id: str) -> PlayerBeadSystem | None:
        """The bead hand of *entity_id*, or ``None`` if it is not a hero
        with a hand."""
        entity = self._entities.get(entity_id)
        if isinstance(entity, Character):
            return entity.bead_hand
        return None

    def with_actor(self, actor_id: str | None) -> GameContext:
        """A copy of this context acting on behalf of *actor_id*."""
        return GameContext(self.grid, self._entities, actor_id, self.dice)


# ---------------------------------------------------------------------------
# BattleState
# ---------------------------------------------------------------------------

class BattleState:
    """Complete state of a single battle.

    This is a plain Python class (not a Pydantic model) because it bundles
    live, mutable systems that reference each other.
    """

    def __init__(
        self,
        *,
        arena: ArenaDefinition,
        monster_definition: MonsterDefinition,
        classes: list[CharacterClass],
        actions: list[ActionDefinition],
        grid: BattleGrid,
        wheel: ActionWheel,
        characters: list[Character],
        monster: MonsterEntity,
        action_registry: ActionRegistry,
        effect_registry: EffectRegistry,
        turn_controller: TurnController,
        observer: BattleStateObserver,
        dice: DiceRoller,
        rng: GameRNG,
    ) -> None:
        # configuration
        self.arena = arena
        self.monster_definition = monster_definition
        self.classes = classes
        self.actions = actions

        # state objects
        self.grid = grid
        self.wheel = wheel
        self.characters = characters
        self.monster = monster
        self.entities: dict[str, Entity] = {c.id: c for c in characters}
        self.entities[monster.id] = monster

        # systems
        self.action_registry = action_registry
        self.effect_registry = effect_registry
        self.turn_controller = turn_controller
        self.observer = observer
        self.dice = dice
        self.rng = rng

    # -- queries -------------------------------------------------------------

    def get_entity(self, entity_id: str) -> Entity | None:
        return self.entities.get(entity_id)

    def get_character(self, entity_id: str) -> Character | None:
        entity = self.entities.get(entity_id)
        return entity if isinstance(entity, Character) else None

    def is_monster(self, entity_id: str) -> bool:
        return entity_id == self.monster.id

    @property
    def living_characters(self) -> list[Character]:
        return [c for c in self.characters if c.is_alive]

    # -- effect context ------------------------------------------------------

    def create_game_context(self, actor_id: str | None = None) -> GameContext:
        """A :class:`GameContext` for effects performed by *actor_id*."""
        return GameContext(self.grid, self.entities, actor_id, self.dice)

    def __repr__(self) -> str:
        return (
            f"BattleState(arena={self.arena.id!r}, monster={self.monster!r}, "
            f"heroes={len(self.characters)})"
        )
