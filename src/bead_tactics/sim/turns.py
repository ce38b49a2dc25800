"""Turn control -- win/lose detection and the battle loop.

:class:`TurnController` is pure bookkeeping over the action wheel and the
combatants.  :class:`TurnFlowController` is the loop that drives a whole
battle through a :class:`~bead_tactics.sim.adapter.BattleAdapter`:

1. Read the battle status; on victory or defeat, transition and stop.
2. Ask the wheel for the next actor.
3. Monster: decide, execute, animate.  Hero: await an action, resolve it,
   retrying on cancellation.
4. Advance the actor on the wheel by the consumed time cost and publish
   the resulting state changes to the observer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

from pydantic import BaseModel, Field

from bead_tactics.ir.events import AnimationEvent, DamageEvent, MoveEvent
from bead_tactics.sim.core.action_wheel import ActionWheel
from bead_tactics.sim.core.entities import Character, Entity, MonsterEntity

if TYPE_CHECKING:
    from bead_tactics.sim.adapter import BattleAdapter
    from bead_tactics.sim.core.battle_state import BattleState

logger = logging.getLogger(__name__)

_MAX_TURNS = 500
_TURN_DELAY_MS = 300
_VICTORY_SCENE = "victory"


class BattleStatus(str, Enum):
    ONGOING = "ongoing"
    VICTORY = "victory"
    DEFEAT = "defeat"


# ---------------------------------------------------------------------------
# TurnController
# ---------------------------------------------------------------------------

class TurnController:
    """Turn order and win/lose conditions over an :class:`ActionWheel`."""

    def __init__(
        self,
        wheel: ActionWheel,
        monster: Entity,
        characters: Sequence[Entity],
    ) -> None:
        self._wheel = wheel
        self._monster = monster
        self._characters = list(characters)

    def get_next_actor(self) -> str | None:
        return self._wheel.get_next_actor()

    def advance_turn(self, entity_id: str, cost: int) -> None:
        self._wheel.advance_entity(entity_id, cost)

    def check_victory(self) -> bool:
        return not self._monster.is_alive

    def check_defeat(self) -> bool:
        return not any(c.is_alive for c in self._characters)

    def get_battle_status(self) -> BattleStatus:
        """Victory is checked first, so mutual annihilation is a victory."""
        if self.check_victory():
            return BattleStatus.VICTORY
        if self.check_defeat():
            return BattleStatus.DEFEAT
        return BattleStatus.ONGOING


# ---------------------------------------------------------------------------
# TurnRecord
# ---------------------------------------------------------------------------

class TurnRecord(BaseModel):
    """What happened in one completed turn."""

    turn: int
    actor_id: str
    action_id: str | None = None
    """The hero's action id, or the monster's decision type."""

    state: str | None = None
    """The monster's AI state after its draw."""

    success: bool = True
    reason: str | None = None
    cost: int = 0
    events: list[AnimationEvent] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# TurnFlowController
# ---------------------------------------------------------------------------

class TurnFlowController:
    """Runs a battle to completion.

    Parameters
    ----------
    state:
        The battle, as produced by :class:`~bead_tactics.sim.builder.BattleBuilder`.
    adapter:
        Prompts, animation and logging.
    max_turns:
        Safety cap; the loop stops with :attr:`BattleStatus.ONGOING` after
        this many turns.
    turn_delay_ms:
        Passed to ``adapter.delay`` after each turn.
    """

    def __init__(
        self,
        state: BattleState,
        adapter: BattleAdapter,
        max_turns: int = _MAX_TURNS,
        turn_delay_ms: int = _TURN_DELAY_MS,
    ) -> None:
        self.state = state
        self.adapter = adapter
        self.max_turns = max_turns
        self.turn_delay_ms = turn_delay_ms
        self.turns = 0
        self.turn_log: list[TurnRecord] = []
        self._fallen: set[str] = set()

    def check_battle_status(self) -> BattleStatus:
        return self.state.turn_controller.get_battle_status()

    # -- monster -------------------------------------------------------------

    async def execute_monster_turn(self) -> TurnRecord:
        """Decide, execute and animate the monster's turn, then advance it."""
        self.adapter.log("--- Monster Turn ---")
        monster = self.state.monster

        targets = self.state.living_characters
        decision = monster.decide_turn(targets)
        events = monster.execute_decision(decision)
        if events:
            await self.adapter.animate(events)

        if decision.type == "move" and decision.destination is None:
            self.adapter.log(f"{monster.id} has nowhere to go")

        record = TurnRecord(
            turn=self.turns,
            actor_id=monster.id,
            action_id=decision.type,
            state=decision.state.name if decision.state is not None else None,
            cost=decision.wheel_cost,
            events=events,
        )
        self._finish_turn(record)
        if decision.drawn_bead is not None:
            self.state.observer.emit_monster_beads_changed(monster.get_bag_counts())
        await self.adapter.delay(self.turn_delay_ms)
        return record

    # -- heroes --------------------------------------------------------------

    async def execute_player_turn(self, actor_id: str) -> TurnRecord:
        """Loop until the hero commits an action, then advance it.

        Cancelled actions and unknown action ids go back to action
        selection.  A committed action that fails still costs its time.
        """
        self.adapter.log("--- Player Turn ---")
        self.adapter.show_player_turn(actor_id)
        character = self.state.get_character(actor_id)

        while True:
            action_id = await self.adapter.await_player_action(actor_id)

            if character is not None and action_id not in character.get_available_action_ids():
                self.adapter.log(f"Unknown action: {action_id}")
                continue
            action = self.state.action_registry.get_action(action_id)
            if action is None:
                self.adapter.log(f"Unknown action: {action_id}")
                continue

            result = await action.begin(actor_id).execute(self.adapter)
            if result.cancelled:
                self.adapter.log(
                    f"Action cancelled: {result.reason}" if result.reason else "Action cancelled"
                )
                continue

            if not result.success and result.reason:
                self.adapter.log(result.reason)

            record = TurnRecord(
                turn=self.turns,
                actor_id=actor_id,
                action_id=action_id,
                success=result.success,
                reason=result.reason,
                cost=result.cost.time,
                events=result.events,
            )
            self._finish_turn(record)
            if character is not None and character.has_bead_hand:
                self.state.observer.emit_hero_beads_changed(
                    actor_id, character.get_hand_counts(),
                )
            await self.adapter.delay(self.turn_delay_ms)
            return record

    # -- loop ----------------------------------------------------------------

    async def start(self) -> BattleStatus:
        """Run turns until the battle ends or ``max_turns`` is reached."""
        while True:
            status = self.check_battle_status()
            if status is not BattleStatus.ONGOING:
                self.adapter.transition(_VICTORY_SCENE, self._outcome(status))
                return status

            if self.turns >= self.max_turns:
                logger.warning("Battle stopped after %d turns", self.turns)
                self.adapter.log(f"Turn limit of {self.max_turns} reached")
                return status

            actor_id = self.state.turn_controller.get_next_actor()
            if actor_id is None:
                self.adapter.log("No actors on wheel!")
                return status

            entity = self.state.get_entity(actor_id)
            if entity is not None and not entity.is_alive:
                # Fallen heroes stay on the grid and the wheel; skipping steps
                # them one segment without counting a turn.
                if actor_id not in self._fallen:
                    self._fallen.add(actor_id)
                    self.adapter.log(f"{actor_id} has fallen")
                self.state.wheel.advance_entity(actor_id, 1)
                continue

            self.state.observer.emit_actor_changed(actor_id)
            if self.state.is_monster(actor_id):
                await self.execute_monster_turn()
            else:
                await self.execute_player_turn(actor_id)

    # -- internal helpers ----------------------------------------------------

    def _finish_turn(self, record: TurnRecord) -> None:
        self.state.turn_controller.advance_turn(record.actor_id, record.cost)
        self.turns += 1
        self.turn_log.append(record)

        observer = self.state.observer
        observer.emit_wheel_advanced(
            record.actor_id, self.state.wheel.get_position(record.actor_id),
        )
        self._publish_events(record.events)

    def _publish_events(self, events: list[AnimationEvent]) -> None:
        observer = self.state.observer
        for event in events:
            if isinstance(event, MoveEvent):
                entity = self.state.get_entity(event.entity_id)
                if isinstance(entity, MonsterEntity):
                    observer.emit_monster_moved(event.to.x, event.to.y)
                elif isinstance(entity, Character):
                    observer.emit_hero_moved(entity.id, event.to.x, event.to.y)
            elif isinstance(event, DamageEvent):
                entity = self.state.get_entity(event.entity_id)
                if isinstance(entity, MonsterEntity):
                    observer.emit_monster_health_changed(event.new_health, event.max_health)
                elif isinstance(entity, Character):
                    observer.emit_hero_health_changed(
                        entity.id, event.new_health, event.max_health,
                    )

    def _outcome(self, status: BattleStatus) -> dict[str, Any]:
        return {
            "victory": status is BattleStatus.VICTORY,
            "monster": self.state.monster_definition.name,
            "turns": self.turns,
        }
