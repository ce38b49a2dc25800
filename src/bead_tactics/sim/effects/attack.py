"""Attack an adjacent entity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from bead_tactics.ir.events import AttackEvent, DamageEvent
from bead_tactics.sim.effects.base import ChainResults, Effect, EffectResult

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import GameContext

_DEFAULT_DAMAGE = 1


class AttackEffect(Effect):
    """Deal damage to ``targetEntity``.

    Params
    ------
    targetEntity:
        Id of the entity to hit.  Must be orthogonally adjacent to the
        attacker.
    damage:
        An int or dice notation (``"1d6+1"``).  Defaults to 1.
    actorId:
        The attacker.  Defaults to the context actor.

    A ``damage`` modifier is added to the rolled damage.  Data:
    ``{"hit": True, "damage": <health actually lost>}``.
    """

    def execute(
        self,
        context: GameContext,
        params: Mapping[str, Any],
        modifiers: Mapping[str, Any],
        chain_results: ChainResults,
    ) -> EffectResult:
        attacker_id = params.get("actorId") or context.actor_id
        target_id = params.get("targetEntity")
        if not attacker_id:
            return EffectResult.failure("No attacker")
        if not isinstance(target_id, str) or target_id.startswith("$"):
            return EffectResult.failure("No target")

        target = context.get_entity(target_id)
        if target is None:
            return EffectResult.failure("Target not found")

        if not context.grid.is_adjacent(attacker_id, target_id):
            return EffectResult.failure("Target not adjacent")

        damage = self._base_damage(context, params.get("damage"))
        bonus = modifiers.get("damage")
        if isinstance(bonus, int):
            damage += bonus

        outcome = target.receive_attack(damage)
        return EffectResult(
            success=True,
            data={"hit": True, "damage": outcome.damage},
            events=[
                AttackEvent(
                    attacker_id=attacker_id,
                    target_id=target_id,
                    damage=outcome.damage,
                ),
                DamageEvent(
                    entity_id=target_id,
                    new_health=target.current_health,
                    max_health=target.max_health,
                ),
            ],
        )

    @staticmethod
    def _base_damage(context: GameContext, value: Any) -> int:
        if isinstance(value, bool) or value is None:
            return _DEFAULT_DAMAGE
        if isinstance(value, int):
            return value or _DEFAULT_DAMAGE
        if isinstance(value, str) and not value.startswith("$"):
            return context.dice.roll(value)
        return _DEFAULT_DAMAGE
