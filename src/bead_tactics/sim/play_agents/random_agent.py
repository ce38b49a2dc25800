"""Random agent -- picks affordable actions and answers uniformly at random.

The ``RandomAgent`` is the baseline for batch runs: it checks that the full
battle loop works end to end for any content, and gives a lower bound on
how winnable a monster is.

Behaviour:
    - Picks a random affordable action not yet tried this turn.
    - Tiles: a random free cell within the prompt's range.
    - Entities: the monster for ``enemy`` prompts, a random living hero for
      ``ally`` prompts, anyone for ``any``.
    - Options: each choice is taken with probability one half (at most one
      for single-select prompts).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bead_tactics.ir.actions import EntityPrompt, OptionPrompt, TilePrompt
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.play_agents.base import AutoPlayAdapter, TurnPlan, affordable_actions

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import BattleState


class RandomAgent(AutoPlayAdapter):
    """Agent that plays random affordable actions.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        super().__init__()
        self._rng = rng or GameRNG(seed=0)

    def plan_turn(
        self,
        state: BattleState,
        actor_id: str,
        exclude: frozenset[str],
    ) -> TurnPlan | None:
        actions = [a for a in affordable_actions(state, actor_id) if a.id not in exclude]
        if not actions:
            return None
        action = self._rng.random_choice(actions)

        plan = TurnPlan(action_id=action.id)
        for prompt in action.parameters:
            if isinstance(prompt, TilePrompt):
                tiles = state.grid.get_valid_moves(actor_id, prompt.range or 1)
                if tiles:
                    plan.tiles[prompt.key] = self._rng.random_choice(tiles)
            elif isinstance(prompt, EntityPrompt):
                candidates = self._entity_candidates(state, actor_id, prompt)
                if candidates:
                    plan.entities[prompt.key] = self._rng.random_choice(candidates)
            elif isinstance(prompt, OptionPrompt):
                plan.options[prompt.key] = self._pick_options(prompt)
        return plan

    @staticmethod
    def _entity_candidates(
        state: BattleState,
        actor_id: str,
        prompt: EntityPrompt,
    ) -> list[str]:
        if prompt.filter == "enemy":
            return [state.monster.id] if state.monster.is_alive else []
        heroes = [c.id for c in state.living_characters if c.id != actor_id]
        if prompt.filter == "ally":
            return heroes
        return heroes + [state.monster.id]

    def _pick_options(self, prompt: OptionPrompt) -> list[str]:
        picks = [c.id for c in prompt.options if self._rng.random_float() < 0.5]
        if not prompt.multi_select and len(picks) > 1:
            picks = [self._rng.random_choice(picks)]
        return picks
