"""Action resolution -- one invocation of one action by one actor.

Resolution runs in phases:

1. **Parametrize**: the action's parameter prompts are exposed in order.
2. **Provide / skip**: a value is bound to each prompt key (or an optional
   prompt is skipped).
3. **Cost**: base cost plus the partial cost of every selected option.
4. **Resolve**: effects run in order with ``$references`` substituted:

   * ``$effectId.field`` -> ``data[field]`` of an effect that already ran.
   * ``$name`` -> the value provided for prompt ``name`` (``$actor`` is
     always the acting entity).

   References that cannot be resolved are left as the literal string.  The
   first failing effect stops the chain.

:meth:`ActionResolution.execute` drives all phases through a
:class:`~bead_tactics.sim.adapter.BattleAdapter`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from pydantic import BaseModel, Field

from bead_tactics.ir.actions import (
    ActionCost,
    ActionDefinition,
    EffectDefinition,
    EntityPrompt,
    OptionPrompt,
    ParameterPrompt,
    TilePrompt,
)
from bead_tactics.ir.arenas import Position
from bead_tactics.ir.events import AnimationEvent
from bead_tactics.sim.effects.base import EffectResult
from bead_tactics.sim.effects.move import coerce_position
from bead_tactics.sim.effects.registry import EffectRegistry

if TYPE_CHECKING:
    from bead_tactics.sim.adapter import BattleAdapter
    from bead_tactics.sim.core.battle_state import GameContext

logger = logging.getLogger(__name__)

ACTOR_KEY = "actor"
"""Implicit parameter bound to the acting entity's id."""


# ---------------------------------------------------------------------------
# Result value objects
# ---------------------------------------------------------------------------

class ValueResult(BaseModel):
    """Whether :meth:`ActionResolution.provide_value` or ``skip`` took."""

    accepted: bool
    reason: str | None = None


class ActionResult(BaseModel):
    """Outcome of one action."""

    cancelled: bool = False
    """True when the action was abandoned before anything was committed."""

    success: bool
    reason: str | None = None
    cost: ActionCost = Field(default_factory=ActionCost)
    """Total cost including selected options."""

    events: list[AnimationEvent] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    """Effect id -> that effect's result data, on success."""


# ---------------------------------------------------------------------------
# Reference resolution
# ---------------------------------------------------------------------------

def resolve_value(
    value: Any,
    values: Mapping[str, Any],
    chain_results: Mapping[str, EffectResult],
) -> Any:
    """Recursively substitute ``$references`` in *value*.

    Dicts and lists are walked; any other non-string value is returned
    unchanged.  Unresolvable references come back as the literal string.
    """
    if isinstance(value, str):
        if not value.startswith("$"):
            return value
        ref = value[1:]
        if "." in ref:
            effect_id, _, field = ref.partition(".")
            result = chain_results.get(effect_id)
            if result is None or field not in result.data:
                return value
            return result.data[field]
        found = values.get(ref)
        return value if found is None else found

    if isinstance(value, dict):
        return {k: resolve_value(v, values, chain_results) for k, v in value.items()}

    if isinstance(value, list):
        return [resolve_value(v, values, chain_results) for v in value]

    return value


# ---------------------------------------------------------------------------
# ActionResolution
# ---------------------------------------------------------------------------

class ActionResolution:
    """Collects parameters for, prices and runs one action.

    Parameters
    ----------
    definition:
        The action being performed.
    actor_id:
        The acting entity.
    context:
        Effect context for *actor_id*.
    effect_registry:
        Where effect implementations are looked up by ``type``.
    """

    def __init__(
        self,
        definition: ActionDefinition,
        actor_id: str,
        context: GameContext,
        effect_registry: EffectRegistry,
    ) -> None:
        self.definition = definition
        self.actor_id = actor_id
        self.context = context
        self._effect_registry = effect_registry
        self._values: dict[str, Any] = {ACTOR_KEY: actor_id}
        self._skipped: set[str] = set()

    # -- phase 1: parametrize ------------------------------------------------

    def parametrize(self) -> Iterator[ParameterPrompt]:
        yield from self.definition.parameters

    # -- phase 2: provide / skip ---------------------------------------------

    def provide_value(self, key: str, value: Any) -> ValueResult:
        """Bind *value* to the prompt *key*.

        Tile values may be a :class:`Position` or an ``{x, y}`` mapping.
        Option values may be a single option id or a list of ids.
        """
        prompt = self.definition.get_parameter(key)
        if prompt is None:
            return ValueResult(accepted=False, reason=f"Unknown parameter: {key}")

        if isinstance(prompt, TilePrompt):
            position = coerce_position(value)
            if position is None:
                return ValueResult(accepted=False, reason=f"Invalid tile for {key}")
            rejection = self._check_tile(prompt, position)
            if rejection:
                return ValueResult(accepted=False, reason=rejection)
            value = position
        elif isinstance(prompt, EntityPrompt):
            if not isinstance(value, str):
                return ValueResult(accepted=False, reason=f"Invalid entity for {key}")
            rejection = self._check_entity(prompt, value)
            if rejection:
                return ValueResult(accepted=False, reason=rejection)
        else:
            if isinstance(value, str):
                selected = [value]
            elif isinstance(value, (list, tuple)):
                selected = list(value)
            else:
                return ValueResult(accepted=False, reason=f"Invalid options for {key}")
            rejection = self._check_options(prompt, selected)
            if rejection:
                return ValueResult(accepted=False, reason=rejection)
            value = selected

        self._values[key] = value
        self._skipped.discard(key)
        return ValueResult(accepted=True)

    def skip(self, key: str) -> ValueResult:
        """Leave an optional prompt unanswered."""
        prompt = self.definition.get_parameter(key)
        if prompt is None:
            return ValueResult(accepted=False, reason=f"Unknown parameter: {key}")
        if not prompt.optional:
            return ValueResult(accepted=False, reason=f"Parameter {key} is not optional")
        self._values.pop(key, None)
        self._skipped.add(key)
        return ValueResult(accepted=True)

    def get_value(self, key: str) -> Any:
        return self._values.get(key)

    @property
    def is_complete(self) -> bool:
        """True once every prompt has a value or was skipped."""
        return all(
            p.key in self._values or p.key in self._skipped
            for p in self.definition.parameters
        )

    def _check_tile(self, prompt: TilePrompt, position: Position) -> str | None:
        grid = self.context.grid
        if not grid.is_in_bounds(position.x, position.y):
            return "Tile out of bounds"
        if prompt.range is not None:
            origin = grid.get_position(self.actor_id)
            if origin is not None and origin.manhattan(position) > prompt.range:
                return "Tile out of range"
        if prompt.filter == "empty":
            occupant = grid.get_entity_at(position.x, position.y)
            if occupant is not None:
                return "Tile is occupied"
        return None

    def _check_entity(self, prompt: EntityPrompt, entity_id: str) -> str | None:
        if self.context.get_entity(entity_id) is None:
            return f"Unknown entity: {entity_id}"
        if prompt.range is not None:
            distance = self.context.grid.get_distance(self.actor_id, entity_id)
            if distance < 0 or distance > prompt.range:
                return "Target out of range"
        return None

    @staticmethod
    def _check_options(prompt: OptionPrompt, selected: list[Any]) -> str | None:
        for option_id in selected:
            if not isinstance(option_id, str) or prompt.get_choice(option_id) is None:
                return f"Unknown option: {option_id}"
        if not prompt.multi_select and len(selected) > 1:
            return f"Only one option may be selected for {prompt.key}"
        return None

    # -- phase 3: cost -------------------------------------------------------

    def selected_option_ids(self) -> list[str]:
        """Selected option ids across every option prompt, in prompt order."""
        selected: list[str] = []
        for prompt in self.definition.parameters:
            if isinstance(prompt, OptionPrompt):
                selected.extend(self._values.get(prompt.key) or [])
        return selected

    def get_total_cost(self) -> ActionCost:
        total = self.definition.cost
        for prompt in self.definition.parameters:
            if not isinstance(prompt, OptionPrompt):
                continue
            for option_id in self._values.get(prompt.key) or []:
                choice = prompt.get_choice(option_id)
                if choice is not None:
                    total = total.merged(choice.cost)
        return total

    # -- phase 4: resolve ----------------------------------------------------

    def _effect_chain(self) -> list[EffectDefinition]:
        chain = list(self.definition.effects)
        options = self.definition.options or {}
        for option_id in self.selected_option_ids():
            option = options.get(option_id)
            if option is not None:
                chain.extend(option.adds)
        return chain

    def _modifiers_for(self, effect_id: str) -> dict[str, Any]:
        modifiers: dict[str, Any] = {}
        options = self.definition.options or {}
        for option_id in self.selected_option_ids():
            option = options.get(option_id)
            if option is not None and effect_id in option.modified_effect_ids():
                modifiers.update(option.modifier)
        return modifiers

    def resolve(self) -> ActionResult:
        """Run the effect chain with the values provided so far.

        Does not spend beads; :meth:`execute` does that before resolving.
        """
        cost = self.get_total_cost()
        chain_results: dict[str, EffectResult] = {}
        events: list[AnimationEvent] = []

        for effect_def in self._effect_chain():
            effect = self._effect_registry.get(effect_def.type)
            if effect is None:
                logger.warning(
                    "Action %s: unknown effect type %r", self.definition.id, effect_def.type,
                )
                return ActionResult(
                    success=False,
                    reason=f"Unknown effect type: {effect_def.type}",
                    cost=cost,
                    events=events,
                )

            params = resolve_value(effect_def.params, self._values, chain_results)
            result = effect.execute(
                self.context,
                params,
                self._modifiers_for(effect_def.id),
                chain_results,
            )
            chain_results[effect_def.id] = result
            events.extend(result.events)

            if not result.success:
                logger.warning(
                    "Action %s: effect %s failed (%s)",
                    self.definition.id, effect_def.id, result.reason,
                )
                return ActionResult(
                    success=False,
                    reason=f"Effect {effect_def.id} failed",
                    cost=cost,
                    events=events,
                )

        return ActionResult(
            success=True,
            cost=cost,
            events=events,
            data={effect_id: r.data for effect_id, r in chain_results.items()},
        )

    # -- full run through an adapter -----------------------------------------

    def _cancelled(self, reason: str | None = None) -> ActionResult:
        return ActionResult(
            cancelled=True,
            success=False,
            reason=reason,
            cost=self.get_total_cost(),
        )

    async def execute(self, adapter: BattleAdapter) -> ActionResult:
        """Collect every parameter through *adapter*, pay, resolve and animate.

        A ``None`` answer to any prompt, a rejected answer, or a bead cost
        the actor cannot afford cancels the action with nothing committed.
        """
        for prompt in self.parametrize():
            if isinstance(prompt, TilePrompt):
                answer: Any = await adapter.prompt_tile(prompt)
            elif isinstance(prompt, EntityPrompt):
                answer = await adapter.prompt_entity(prompt)
            else:
                answer = await adapter.prompt_options(prompt)

            if answer is None:
                return self._cancelled()

            accepted = self.provide_value(prompt.key, answer)
            if not accepted.accepted:
                return self._cancelled(accepted.reason)

        bead_cost = self.get_total_cost().bead_counts()
        bead_hand = self.context.get_bead_hand(self.actor_id)
        if bead_hand is not None and bead_cost.total > 0:
            if not bead_hand.spend_cost(bead_cost):
                return self._cancelled(f"Cannot afford {self.definition.name}")

        result = self.resolve()
        if result.events:
            await adapter.animate(result.events)
        return result
