"""Heuristic agent -- walk up to the monster and hit it.

Priority each hero turn:

1. **Adjacent**: attack with the strongest affordable option set; if no
   attack is affordable, rest.
2. **Approach**: take the movement action and tile that get closest to the
   monster, cheapest action first on ties.  Only moves that actually close
   the distance are considered.
3. **Rest**: draw beads.

Actions are classified from their data (category, prompts, effect types),
so new content works without code changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from bead_tactics.ir.actions import (
    ActionCategory,
    ActionDefinition,
    EntityPrompt,
    OptionPrompt,
    TilePrompt,
)
from bead_tactics.sim.play_agents.base import (
    AutoPlayAdapter,
    TurnPlan,
    affordable_actions,
    can_afford_with,
)

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import BattleState

_DRAW_EFFECT_TYPE = "drawBeads"

P = TypeVar("P", TilePrompt, EntityPrompt, OptionPrompt)


def _first_prompt(action: ActionDefinition, kind: type[P]) -> P | None:
    for prompt in action.parameters:
        if isinstance(prompt, kind):
            return prompt
    return None


def _is_rest(action: ActionDefinition) -> bool:
    return any(e.type == _DRAW_EFFECT_TYPE for e in action.effects)


class HeuristicAgent(AutoPlayAdapter):
    """Greedy melee policy for a party fighting one monster."""

    def plan_turn(
        self,
        state: BattleState,
        actor_id: str,
        exclude: frozenset[str],
    ) -> TurnPlan | None:
        actions = [a for a in affordable_actions(state, actor_id) if a.id not in exclude]
        monster = state.monster
        distance = state.grid.get_distance(actor_id, monster.id)

        if distance == 1:
            plan = self._plan_attack(state, actor_id, actions, distance)
            return plan or self._plan_rest(actions)

        plan = self._plan_approach(state, actor_id, actions, distance)
        if plan is not None:
            return plan
        plan = self._plan_attack(state, actor_id, actions, distance)
        return plan or self._plan_rest(actions)

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def _plan_attack(
        self,
        state: BattleState,
        actor_id: str,
        actions: list[ActionDefinition],
        distance: int,
    ) -> TurnPlan | None:
        if distance < 0:
            return None
        for action in actions:
            if action.category is not ActionCategory.ATTACK:
                continue
            prompt = _first_prompt(action, EntityPrompt)
            if prompt is None or prompt.filter == "ally":
                continue
            if prompt.range is not None and distance > prompt.range:
                continue

            plan = TurnPlan(action_id=action.id, entities={prompt.key: state.monster.id})
            selected: list[str] = []
            for option_prompt in action.parameters:
                if not isinstance(option_prompt, OptionPrompt):
                    continue
                picks: list[str] = []
                for choice in option_prompt.options:
                    if can_afford_with(state, actor_id, action, selected + picks + [choice.id]):
                        picks.append(choice.id)
                        if not option_prompt.multi_select:
                            break
                selected.extend(picks)
                plan.options[option_prompt.key] = picks
            return plan
        return None

    def _plan_approach(
        self,
        state: BattleState,
        actor_id: str,
        actions: list[ActionDefinition],
        distance: int,
    ) -> TurnPlan | None:
        target = state.monster.get_position()
        if target is None:
            return None

        best: tuple[int, int, int] | None = None
        best_plan: TurnPlan | None = None
        for action in actions:
            if action.category is not ActionCategory.MOVEMENT:
                continue
            prompt = _first_prompt(action, TilePrompt)
            if prompt is None:
                continue
            for tile in state.grid.get_valid_moves(actor_id, prompt.range or 1):
                score = (
                    tile.manhattan(target),
                    action.cost.time,
                    action.cost.bead_counts().total,
                )
                if best is None or score < best:
                    best = score
                    best_plan = TurnPlan(action_id=action.id, tiles={prompt.key: tile})

        if best is None or (distance >= 0 and best[0] >= distance):
            return None
        return best_plan

    @staticmethod
    def _plan_rest(actions: list[ActionDefinition]) -> TurnPlan | None:
        for action in actions:
            if _is_rest(action) and not action.parameters:
                return TurnPlan(action_id=action.id)
        return None
