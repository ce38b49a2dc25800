"""Monster state machine -- bead-driven AI.

A monster's entire personality is its transition table: each state names
the attack it carries (damage, range, wheel cost) and, for every bead
color, the state the monster moves to when that color is drawn.
"""

from __future__ import annotations

import logging
from typing import Iterable

from bead_tactics.ir.beads import BeadColor
from bead_tactics.ir.monsters import MonsterStateDefinition

logger = logging.getLogger(__name__)


class MonsterStateMachine:
    """Tracks the current state of a monster and transitions on bead draws.

    Transition targets are checked lazily: a dangling target raises when the
    transition is taken, not at construction.

    Parameters
    ----------
    states:
        State definitions.  Each must carry its ``name``.
    start_state:
        Name of the initial state.

    Raises
    ------
    ValueError
        If *start_state* is not among *states*.
    """

    def __init__(
        self,
        states: Iterable[MonsterStateDefinition],
        start_state: str,
    ) -> None:
        self._states: dict[str, MonsterStateDefinition] = {s.name: s for s in states}
        if start_state not in self._states:
            raise ValueError(
                f"Invalid start state: {start_state!r} not found in state definitions"
            )
        self._start_state = start_state
        self._current = start_state

    @property
    def current_state(self) -> MonsterStateDefinition:
        return self._states[self._current]

    @property
    def current_state_name(self) -> str:
        return self._current

    @property
    def state_names(self) -> list[str]:
        return list(self._states)

    def transition(self, color: BeadColor | str) -> MonsterStateDefinition:
        """Move to the state mapped from *color* and return it.

        Raises
        ------
        ValueError
            If the current state has no transition for *color*, or the
            target state is not defined.
        """
        color = BeadColor(color)
        target = self.current_state.transitions.get(color.value)
        if not target:
            raise ValueError(
                f"State {self._current!r} has no transition for {color.value} bead"
            )
        if target not in self._states:
            raise ValueError(
                f"Transition target {target!r} not found in state definitions"
            )
        logger.debug("Monster state %s -(%s)-> %s", self._current, color.value, target)
        self._current = target
        return self.current_state

    def reset(self) -> None:
        """Return to the configured start state."""
        self._current = self._start_state

    def __repr__(self) -> str:
        return f"MonsterStateMachine(current={self._current!r}, states={len(self._states)})"
