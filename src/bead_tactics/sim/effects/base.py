"""The effect contract.

An effect is one small, stateless game operation (move, attack, draw
beads, ...).  Actions chain effects together; each effect receives its
resolved params, the modifiers collected from selected options, and the
results of the effects that ran before it in the same action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import BaseModel, Field

from bead_tactics.ir.events import AnimationEvent

if TYPE_CHECKING:
    from bead_tactics.sim.core.battle_state import GameContext


class EffectResult(BaseModel):
    """Outcome of one effect execution.

    ``data`` is what later effects in the chain can reference as
    ``$effectId.field``.
    """

    success: bool
    data: dict[str, Any] = Field(default_factory=dict)
    events: list[AnimationEvent] = Field(default_factory=list)
    reason: str | None = None

    @classmethod
    def failure(cls, reason: str) -> EffectResult:
        return cls(success=False, reason=reason)


ChainResults = Mapping[str, EffectResult]


class Effect(ABC):
    """Base class for effect implementations.

    Implementations must be stateless so a single instance can be shared by
    every action.  They must report missing prerequisites as a failed
    :class:`EffectResult` rather than raising.
    """

    @abstractmethod
    def execute(
        self,
        context: GameContext,
        params: Mapping[str, Any],
        modifiers: Mapping[str, Any],
        chain_results: ChainResults,
    ) -> EffectResult:
        """Apply the effect and describe what happened."""
