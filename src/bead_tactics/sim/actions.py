"""Action registry and executable actions.

The registry owns every :class:`ActionDefinition` of a battle together with
the :class:`EffectRegistry` and a per-actor :class:`GameContext` factory.
``get_action`` wraps a definition into an :class:`Action`, and
``Action.begin`` starts one :class:`ActionResolution` for one actor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from bead_tactics.ir.actions import ActionCost, ActionDefinition, ParameterPrompt
from bead_tactics.sim.effects.registry import EffectRegistry
from bead_tactics.sim.resolution import ActionResolution

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import GameContext

ContextFactory = Callable[[str], "GameContext"]


# ---------------------------------------------------------------------------
# Action
# ---------------------------------------------------------------------------

class Action:
    """An action definition bound to the systems needed to perform it."""

    def __init__(
        self,
        definition: ActionDefinition,
        effect_registry: EffectRegistry,
        context_factory: ContextFactory,
    ) -> None:
        self.definition = definition
        self._effect_registry = effect_registry
        self._context_factory = context_factory

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def cost(self) -> ActionCost:
        return self.definition.cost

    def parametrize(self) -> Iterator[ParameterPrompt]:
        """Yield the parameter prompts in declaration order."""
        yield from self.definition.parameters

    def begin(self, actor_id: str) -> ActionResolution:
        """Start resolving this action on behalf of *actor_id*."""
        return ActionResolution(
            self.definition,
            actor_id,
            self._context_factory(actor_id),
            self._effect_registry,
        )

    def __repr__(self) -> str:
        return f"Action({self.id!r})"


# ---------------------------------------------------------------------------
# ActionRegistry
# ---------------------------------------------------------------------------

class ActionRegistry:
    """Action definitions by id.

    Parameters
    ----------
    effect_registry:
        Effect implementations.  Defaults to
        :meth:`EffectRegistry.with_defaults`.
    context_factory:
        ``actor_id -> GameContext``.  Required by :meth:`get_action`; the
        battle builder binds it once the battle state exists.
    """

    def __init__(
        self,
        effect_registry: EffectRegistry | None = None,
        context_factory: ContextFactory | None = None,
    ) -> None:
        self.effect_registry = effect_registry or EffectRegistry.with_defaults()
        self._context_factory = context_factory
        self._actions: dict[str, ActionDefinition] = {}

    def bind_context(self, context_factory: ContextFactory) -> None:
        self._context_factory = context_factory

    # -- registration --------------------------------------------------------

    def register(self, definition: ActionDefinition) -> None:
        """Register *definition*, replacing any action with the same id."""
        self._actions[definition.id] = definition

    def register_all(self, definitions: Iterable[ActionDefinition]) -> None:
        for definition in definitions:
            self.register(definition)

    # -- lookup --------------------------------------------------------------

    def get(self, action_id: str) -> ActionDefinition | None:
        return self._actions.get(action_id)

    def has(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_all(self) -> list[ActionDefinition]:
        return list(self._actions.values())

    def get_multiple(self, action_ids: Iterable[str]) -> list[ActionDefinition]:
        """Definitions for *action_ids*, in order, skipping unknown ids."""
        return [self._actions[a] for a in action_ids if a in self._actions]

    def get_action(self, action_id: str) -> Action | None:
        """An executable :class:`Action`, or ``None`` for unknown ids.

        Raises
        ------
        ValueError
            If no context factory has been bound.
        """
        definition = self._actions.get(action_id)
        if definition is None:
            return None
        if self._context_factory is None:
            raise ValueError("ActionRegistry has no context factory bound")
        return Action(definition, self.effect_registry, self._context_factory)

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions
