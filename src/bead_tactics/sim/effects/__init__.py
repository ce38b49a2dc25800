"""Effect implementations and the effect registry."""

from bead_tactics.sim.effects.attack import AttackEffect
from bead_tactics.sim.effects.base import ChainResults, Effect, EffectResult
from bead_tactics.sim.effects.draw_beads import DrawBeadsEffect
from bead_tactics.sim.effects.move import MoveEffect
from bead_tactics.sim.effects.registry import EffectRegistry

__all__ = [
    # base
    "ChainResults",
    "Effect",
    "EffectResult",
    # registry
    "EffectRegistry",
    # canonical effects
    "AttackEffect",
    "DrawBeadsEffect",
    "MoveEffect",
]
