"""Draw beads into a hero's hand."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from bead_tactics.ir.events import RestEvent
from bead_tactics.sim.effects.base import ChainResults, Effect, EffectResult

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import GameContext


class DrawBeadsEffect(Effect):
    """Params: ``count``, ``entityId`` (defaults to the context actor).
    Data: ``{"count": <drawn>, "beads": [colors]}``."""

    def execute(
        self,
        context: GameContext,
        params: Mapping[str, Any],
        modifiers: Mapping[str, Any],
        chain_results: ChainResults,
    ) -> EffectResult:
        entity_id = params.get("entityId") or context.actor_id
        count = params.get("count")
        if not isinstance(count, int) or isinstance(count, bool):
            count = 0
        bonus = modifiers.get("count")
        if isinstance(bonus, int):
            count += bonus

        if not entity_id:
            return EffectResult.failure("No entity")
        bead_hand = context.get_bead_hand(entity_id)
        if bead_hand is None:
            return EffectResult.failure(f"{entity_id} has no bead hand")

        try:
            drawn = bead_hand.draw_to_hand(count)
        except ValueError as exc:
            return EffectResult.failure(str(exc))

        return EffectResult(
            success=True,
            data={"count": len(drawn), "beads": drawn},
            events=[RestEvent(entity_id=entity_id, beads_drawn=drawn)],
        )
