"""Lookup table from effect type names to implementations."""

from __future__ import annotations

from bead_tactics.sim.effects.base import Effect


class EffectRegistry:
    """Maps effect ``type`` strings (as used in action definitions) to
    :class:`Effect` instances."""

    def __init__(self) -> None:
        self._effects: dict[str, Effect] = {}

    @classmethod
    def with_defaults(cls) -> EffectRegistry:
        """A registry with ``move``, ``attack`` and ``drawBeads`` registered."""
        from bead_tactics.sim.effects.attack import AttackEffect
        from bead_tactics.sim.effects.draw_beads import DrawBeadsEffect
        from bead_tactics.sim.effects.move import MoveEffect

        registry = cls()
        registry.register("move", MoveEffect())
        registry.register("attack", AttackEffect())
        registry.register("drawBeads", DrawBeadsEffect())
        return registry

    def register(self, effect_type: str, effect: Effect) -> None:
        """Register *effect* under *effect_type*, replacing any previous one."""
        self._effects[effect_type] = effect

    def get(self, effect_type: str) -> Effect | None:
        return self._effects.get(effect_type)

    def has(self, effect_type: str) -> bool:
        return effect_type in self._effects

    @property
    def types(self) -> list[str]:
        return list(self._effects)
