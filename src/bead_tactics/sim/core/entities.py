"""Entities that take part in a battle: heroes and the monster.

Entities hold a non-owning reference to the :class:`BattleGrid` and never
store their own coordinates; every position query goes through the grid.
They are plain Python classes (not Pydantic models) because they carry
live references to the grid and to mutable bead containers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Literal, Sequence

from pydantic import BaseModel

from bead_tactics.ir.actions import ActionDefinition
from bead_tactics.ir.arenas import Position
from bead_tactics.ir.beads import BeadColor, BeadCounts
from bead_tactics.ir.characters import (
    DEFAULT_INNATE_ACTIONS,
    EquipmentDefinition,
    EquipmentSlot,
)
from bead_tactics.ir.events import (
    AnimationEvent,
    AttackEvent,
    BeadDrawEvent,
    DamageEvent,
    MoveEvent,
    StateChangeEvent,
)
from bead_tactics.ir.monsters import MonsterStateDefinition
from bead_tactics.sim.core.grid import BattleGrid, MoveResult
from bead_tactics.sim.mechanics.beads import BeadPile, BeadPool, PlayerBeadSystem, RandomFn
from bead_tactics.sim.mechanics.targeting import find_closest_target, step_toward
from bead_tactics.sim.monster_ai import MonsterStateMachine

if TYPE_CHECKING:
    from bead_tactics.sim.actions import ActionRegistry

logger = logging.getLogger(__name__)


class AttackOutcome(BaseModel):
    """Result of :meth:`Entity.receive_attack`."""

    success: bool = True
    damage: int = 0
    """Health actually lost (capped at the health the entity had)."""


# ---------------------------------------------------------------------------
# Entity base
# ---------------------------------------------------------------------------

class Entity:
    """Common base for anything with health on the grid."""

    def __init__(self, entity_id: str, max_health: int, grid: BattleGrid) -> None:
        self.id = entity_id
        self.max_health = max_health
        self.current_health = max_health
        self._grid = grid

    # -- position (delegated to the grid) ------------------------------------

    def get_position(self) -> Position | None:
        return self._grid.get_position(self.id)

    def move_to(self, dest: Position) -> MoveResult:
        return self._grid.move_entity(self.id, dest)

    # -- health --------------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    def receive_attack(self, damage: int) -> AttackOutcome:
        """Lose *damage* health, never dropping below 0."""
        damage = max(0, damage)
        actual = min(damage, self.current_health)
        self.current_health -= actual
        return AttackOutcome(success=True, damage=actual)

    def heal(self, amount: int) -> None:
        """Heal *amount* health, capped at ``max_health``."""
        if amount <= 0:
            return
        self.current_health = min(self.max_health, self.current_health + amount)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.id!r}, "
            f"hp={self.current_health}/{self.max_health})"
        )


# ---------------------------------------------------------------------------
# Character
# ---------------------------------------------------------------------------

class Character(Entity):
    """A player-controlled hero.

    The actions a hero may take are its innate actions plus every action
    granted by its equipment.  Action definitions are looked up in the
    shared :class:`~bead_tactics.sim.actions.ActionRegistry`.
    """

    def __init__(
        self,
        entity_id: str,
        max_health: int,
        grid: BattleGrid,
        action_registry: ActionRegistry | None = None,
    ) -> None:
        super().__init__(entity_id, max_health, grid)
        self._action_registry = action_registry
        self._equipment: dict[EquipmentSlot, EquipmentDefinition] = {}
        self._innate_actions: list[str] = list(DEFAULT_INNATE_ACTIONS)
        self._bead_hand: PlayerBeadSystem | None = None

    # -- equipment -----------------------------------------------------------

    def equip(self, equipment: EquipmentDefinition) -> None:
        """Equip an item, replacing whatever occupied its slot."""
        self._equipment[equipment.slot] = equipment

    def unequip(self, slot: EquipmentSlot) -> None:
        self._equipment.pop(slot, None)

    def get_equipment(self, slot: EquipmentSlot) -> EquipmentDefinition | None:
        return self._equipment.get(slot)

    # -- actions -------------------------------------------------------------

    @property
    def innate_actions(self) -> list[str]:
        return list(self._innate_actions)

    def set_innate_actions(self, action_ids: Iterable[str]) -> None:
        self._innate_actions = list(action_ids)

    def get_available_action_ids(self) -> list[str]:
        """Innate actions followed by equipment actions, without duplicates."""
        ids: list[str] = []
        for action_id in self._innate_actions:
            if action_id not in ids:
                ids.append(action_id)
        for equipment in self._equipment.values():
            for action_id in equipment.actions:
                if action_id not in ids:
                    ids.append(action_id)
        return ids

    def get_available_actions(self) -> list[ActionDefinition]:
        """Definitions for every available action id that is registered."""
        return self._require_registry().get_multiple(self.get_available_action_ids())

    def get_action(self, action_id: str) -> ActionDefinition:
        """Return the definition of *action_id*.

        Raises
        ------
        ValueError
            If the hero does not have the action or it is not registered.
        """
        registry = self._require_registry()
        if action_id not in self.get_available_action_ids():
            raise ValueError(f"Character {self.id!r} does not have action {action_id!r}")
        definition = registry.get(action_id)
        if definition is None:
            raise ValueError(f"Action {action_id!r} is not registered")
        return definition

    def _require_registry(self) -> ActionRegistry:
        if self._action_registry is None:
            raise ValueError("ActionRegistry not configured")
        return self._action_registry

    # -- beads ---------------------------------------------------------------

    def initialize_bead_hand(
        self,
        initial: BeadCounts | None = None,
        random_fn: RandomFn | None = None,
    ) -> None:
        self._bead_hand = PlayerBeadSystem(initial, random_fn)

    @property
    def has_bead_hand(self) -> bool:
        return self._bead_hand is not None

    @property
    def bead_hand(self) -> PlayerBeadSystem | None:
        return self._bead_hand

    def draw_beads_to_hand(self, count: int) -> list[BeadColor]:
        """Draw *count* beads into the hand.  No-op without a bead hand."""
        if self._bead_hand is None:
            return []
        return self._bead_hand.draw_to_hand(count)

    def get_hand_counts(self) -> BeadCounts | None:
        if self._bead_hand is None:
            return None
        return self._bead_hand.get_hand_counts()


# ---------------------------------------------------------------------------
# MonsterAction (decision value object)
# ---------------------------------------------------------------------------

class MonsterAction(BaseModel):
    """What the monster decided to do this turn.  Computing it mutates only
    the bead bag and the state pointer; applying it is
    :meth:`MonsterEntity.execute_decision`."""

    model_config = {"arbitrary_types_allowed": True}

    type: Literal["attack", "move", "idle"]
    target: Entity | None = None
    destination: Position | None = None
    drawn_bead: BeadColor | None = None
    state: MonsterStateDefinition | None = None
    wheel_cost: int = 1


# ---------------------------------------------------------------------------
# MonsterEntity
# ---------------------------------------------------------------------------

class MonsterEntity(Entity):
    """The boss, driven by a bead bag and a :class:`MonsterStateMachine`.

    Without both a bead bag and a state machine the monster idles every
    turn at wheel cost 1.
    """

    def __init__(self, entity_id: str, max_health: int, grid: BattleGrid) -> None:
        super().__init__(entity_id, max_health, grid)
        self._bead_pool: BeadPool | None = None
        self._bead_discard: BeadPile | None = None
        self._state_machine: MonsterStateMachine | None = None
        self.previous_state_name: str | None = None

    # -- setup ---------------------------------------------------------------

    def initialize_bead_bag(
        self,
        beads: BeadCounts,
        random_fn: RandomFn | None = None,
    ) -> None:
        self._bead_discard = BeadPile()
        self._bead_pool = BeadPool(beads, self._bead_discard, random_fn)

    def initialize_state_machine(
        self,
        states: Iterable[MonsterStateDefinition],
        start_state: str,
    ) -> None:
        self._state_machine = MonsterStateMachine(states, start_state)

    # -- queries -------------------------------------------------------------

    @property
    def has_bead_bag(self) -> bool:
        return self._bead_pool is not None

    @property
    def has_state_machine(self) -> bool:
        return self._state_machine is not None

    @property
    def state_machine(self) -> MonsterStateMachine | None:
        return self._state_machine

    def get_bag_counts(self) -> BeadCounts | None:
        if self._bead_pool is None:
            return None
        return self._bead_pool.get_remaining_counts()

    def get_discarded_counts(self) -> BeadCounts | None:
        if self._bead_discard is None:
            return None
        return self._bead_discard.get_counts()

    # -- turn ----------------------------------------------------------------

    def decide_turn(self, targets: Sequence[Entity]) -> MonsterAction:
        """Draw a bead, transition and choose between attack, move and idle.

        The drawn bead goes to the discard pile immediately.  The decision
        itself is applied by :meth:`execute_decision`.
        """
        if (
            self._bead_pool is None
            or self._bead_discard is None
            or self._state_machine is None
        ):
            return MonsterAction(type="idle", wheel_cost=1)

        self.previous_state_name = self._state_machine.current_state_name

        drawn = self._bead_pool.draw()
        state = self._state_machine.transition(drawn)
        self._bead_discard.add(drawn)

        wheel_cost = state.wheel_cost if state.wheel_cost is not None else 1
        attack_range = state.range if state.range is not None else 1

        target = find_closest_target(self._grid, self.id, targets)
        if target is None:
            return MonsterAction(
                type="idle", drawn_bead=drawn, state=state, wheel_cost=wheel_cost,
            )

        distance = self._grid.get_distance(self.id, target.id)
        if distance <= attack_range:
            return MonsterAction(
                type="attack",
                target=target,
                drawn_bead=drawn,
                state=state,
                wheel_cost=wheel_cost,
            )

        return MonsterAction(
            type="move",
            target=target,
            destination=step_toward(self._grid, self.id, target.id),
            drawn_bead=drawn,
            state=state,
            wheel_cost=wheel_cost,
        )

    def execute_decision(self, decision: MonsterAction) -> list[AnimationEvent]:
        """Apply *decision* and return the events describing it, in order:
        bead draw, state change, then the attack or move itself."""
        events: list[AnimationEvent] = []

        if decision.drawn_bead is not None:
            events.append(BeadDrawEvent(color=decision.drawn_bead))

        if (
            decision.state is not None
            and self.previous_state_name is not None
            and decision.state.name != self.previous_state_name
        ):
            events.append(StateChangeEvent(
                from_state=self.previous_state_name,
                to_state=decision.state.name,
            ))

        if decision.type == "attack" and decision.target is not None and decision.state is not None:
            damage = decision.state.damage
            if damage is None:
                damage = 1
            decision.target.receive_attack(damage)
            events.append(AttackEvent(
                attacker_id=self.id,
                target_id=decision.target.id,
                damage=damage,
            ))
            events.append(DamageEvent(
                entity_id=decision.target.id,
                new_health=decision.target.current_health,
                max_health=decision.target.max_health,
            ))
        elif decision.type == "move" and decision.destination is not None:
            origin = self.get_position()
            result = self.move_to(decision.destination)
            if result.success and origin is not None:
                events.append(MoveEvent(
                    entity_id=self.id,
                    from_position=origin,
                    to=decision.destination,
                ))
            elif not result.success:
                logger.debug("%s could not move: %s", self.id, result.reason)

        return events
