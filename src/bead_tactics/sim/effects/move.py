"""Move the acting entity to a destination cell."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from pydantic import ValidationError

from bead_tactics.ir.arenas import Position
from bead_tactics.ir.events import MoveEvent
from bead_tactics.sim.effects.base import ChainResults, Effect, EffectResult

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import GameContext


def coerce_position(value: Any) -> Position | None:
    """Accept a :class:`Position` or an ``{"x": .., "y": ..}`` mapping."""
    if isinstance(value, Position):
        return value
    if isinstance(value, Mapping):
        try:
            return Position.model_validate(value)
        except ValidationError:
            return None
    return None


class MoveEffect(Effect):
    """Params: ``destination`` (required), ``actorId`` (defaults to the
    context actor).  Data: ``{"destination": Position}``."""

    def execute(
        self,
        context: GameContext,
        params: Mapping[str, Any],
        modifiers: Mapping[str, Any],
        chain_results: ChainResults,
    ) -> EffectResult:
        actor_id = params.get("actorId") or context.actor_id
        if not actor_id:
            return EffectResult.failure("No actor")

        destination = coerce_position(params.get("destination"))
        if destination is None:
            return EffectResult.failure("Invalid destination")

        origin = context.grid.get_position(actor_id)
        if origin is None:
            return EffectResult.failure(f"{actor_id} is not on the grid")

        result = context.grid.move_entity(actor_id, destination)
        if not result.success:
            return EffectResult.failure(f"Cannot move: {result.reason}")

        return EffectResult(
            success=True,
            data={"destination": destination},
            events=[MoveEvent(entity_id=actor_id, from_position=origin, to=destination)],
        )
