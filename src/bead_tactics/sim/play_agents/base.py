"""Base class for agents that play bead-tactics battles headless.

An agent is a :class:`~bead_tactics.sim.adapter.BattleAdapter` without a
UI: presentation calls are recorded instead of drawn, and every prompt is
answered from a :class:`TurnPlan` the agent makes when asked for an action.
Subclasses implement :meth:`AutoPlayAdapter.plan_turn`.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from bead_tactics.ir.actions import (
    ActionDefinition,
    EntityPrompt,
    OptionPrompt,
    TilePrompt,
)
from bead_tactics.ir.arenas import Position
from bead_tactics.ir.events import AnimationEvent
from bead_tactics.sim.adapter import BattleAdapter
from bead_tactics.sim.mechanics.beads import bead_counts_to_action_cost, can_afford

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import BattleState

logger = logging.getLogger(__name__)

# A hero never commits more than one full lap of the wheel to one action.
_TIME_BUDGET = 8


class TurnPlan(BaseModel):
    """An action id plus the answers to its prompts, keyed by prompt key."""

    action_id: str
    tiles: dict[str, Position] = Field(default_factory=dict)
    entities: dict[str, str] = Field(default_factory=dict)
    options: dict[str, list[str]] = Field(default_factory=dict)


def affordable_actions(state: BattleState, actor_id: str) -> list[ActionDefinition]:
    """The hero's available actions whose bead cost its hand covers."""
    character = state.get_character(actor_id)
    if character is None:
        return []
    hand = character.get_hand_counts()
    actions = character.get_available_actions()
    if hand is None:
        return actions
    available = bead_counts_to_action_cost(hand, _TIME_BUDGET)
    return [a for a in actions if can_afford(available, a.cost)]


def can_afford_with(
    state: BattleState,
    actor_id: str,
    action: ActionDefinition,
    option_ids: list[str],
) -> bool:
    """Whether the hand covers *action* plus the listed options' costs."""
    character = state.get_character(actor_id)
    hand = character.get_hand_counts() if character is not None else None
    if hand is None:
        return True
    total = action.cost
    for prompt in action.parameters:
        if isinstance(prompt, OptionPrompt):
            for option_id in option_ids:
                choice = prompt.get_choice(option_id)
                if choice is not None:
                    total = total.merged(choice.cost)
    return can_afford(bead_counts_to_action_cost(hand, _TIME_BUDGET), total)


class AutoPlayAdapter(BattleAdapter):
    """Headless adapter that answers prompts from its own plans.

    Call :meth:`attach` with the battle state before starting the battle.
    Within one hero turn an action id is never proposed twice, so a
    cancelled plan makes the agent fall through to its next choice.
    """

    def __init__(self) -> None:
        self.state: BattleState | None = None
        self.messages: list[str] = []
        self.animated: list[AnimationEvent] = []
        self.scene: str | None = None
        self.outcome: dict[str, Any] | None = None
        self.current_actor: str | None = None
        self._plan: TurnPlan | None = None
        self._tried: set[str] = set()

    def attach(self, state: BattleState) -> None:
        self.state = state

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    @abstractmethod
    def plan_turn(
        self,
        state: BattleState,
        actor_id: str,
        exclude: frozenset[str],
    ) -> TurnPlan | None:
        """Choose what hero *actor_id* does, never picking an id in *exclude*.

        Returns
        -------
        TurnPlan | None
            ``None`` when nothing outside *exclude* makes sense; the adapter
            then falls back to the first available action.
        """

    async def await_player_action(self, actor_id: str) -> str:
        if self.state is None:
            raise ValueError("AutoPlayAdapter is not attached to a battle")
        plan = self.plan_turn(self.state, actor_id, frozenset(self._tried))
        if plan is None:
            character = self.state.get_character(actor_id)
            fallback = character.get_available_action_ids() if character else []
            if not fallback:
                raise ValueError(f"{actor_id} has no actions")
            untried = [a for a in fallback if a not in self._tried]
            plan = TurnPlan(action_id=(untried or fallback)[0])
        self._tried.add(plan.action_id)
        self._plan = plan
        return plan.action_id

    # ------------------------------------------------------------------
    # Prompts (answered from the current plan)
    # ------------------------------------------------------------------

    async def prompt_tile(self, prompt: TilePrompt) -> Position | None:
        return self._plan.tiles.get(prompt.key) if self._plan else None

    async def prompt_entity(self, prompt: EntityPrompt) -> str | None:
        return self._plan.entities.get(prompt.key) if self._plan else None

    async def prompt_options(self, prompt: OptionPrompt) -> list[str] | None:
        if self._plan is None:
            return None
        return self._plan.options.get(prompt.key, [])

    # ------------------------------------------------------------------
    # Presentation (recorded, not drawn)
    # ------------------------------------------------------------------

    async def animate(self, events: list[AnimationEvent]) -> None:
        self.animated.extend(events)

    async def delay(self, ms: int) -> None:
        return None

    def log(self, message: str) -> None:
        logger.info(message)
        self.messages.append(message)

    def show_player_turn(self, actor_id: str) -> None:
        self.current_actor = actor_id
        self._tried.clear()
        self._plan = None

    def transition(self, scene: str, data: dict[str, Any]) -> None:
        self.scene = scene
        self.outcome = dict(data)
