"""Battle adapter -- the boundary between the engine and whatever drives it.

A UI implements this to prompt a human; :mod:`bead_tactics.sim.play_agents`
implements it to play headless.  The engine awaits at most one prompt at a
time.
"""

from __future__ import annotations

import abc
from typing import Any

from bead_tactics.ir.actions import EntityPrompt, OptionPrompt, TilePrompt
from bead_tactics.ir.arenas import Position
from bead_tactics.ir.events import AnimationEvent


class BattleAdapter(abc.ABC):
    """Presentation-layer interface consumed by the turn loop and by
    :meth:`ActionResolution.execute`.

    Every ``prompt_*`` method returns ``None`` to cancel the action being
    resolved.
    """

    # -- prompts -------------------------------------------------------------

    @abc.abstractmethod
    async def prompt_tile(self, prompt: TilePrompt) -> Position | None:
        """Ask for a grid cell (within ``prompt.range`` of the actor)."""

    @abc.abstractmethod
    async def prompt_entity(self, prompt: EntityPrompt) -> str | None:
        """Ask for an entity id."""

    @abc.abstractmethod
    async def prompt_options(self, prompt: OptionPrompt) -> list[str] | None:
        """Ask for option ids (an empty list selects nothing)."""

    @abc.abstractmethod
    async def await_player_action(self, actor_id: str) -> str:
        """Wait for the hero *actor_id* to pick an action id."""

    # -- presentation --------------------------------------------------------

    @abc.abstractmethod
    async def animate(self, events: list[AnimationEvent]) -> None:
        """Play *events* in order."""

    @abc.abstractmethod
    async def delay(self, ms: int) -> None:
        """Pause between turns."""

    @abc.abstractmethod
    def log(self, message: str) -> None:
        """Append a line to the battle log."""

    @abc.abstractmethod
    def show_player_turn(self, actor_id: str) -> None:
        """Signal that it is hero *actor_id*'s turn."""

    @abc.abstractmethod
    def transition(self, scene: str, data: dict[str, Any]) -> None:
        """Leave the battle for *scene* (e.g. the victory screen)."""
