"""Dice notation rolling (``"2d6"``, ``"1d8+2"``, ``"3d6-1"``)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from bead_tactics.sim.core.rng import GameRNG

_DICE_RE = re.compile(r"(\d+)d(\d+)([+-]\d+)?", re.IGNORECASE)


class DiceNotation(BaseModel):
    count: int
    sides: int
    modifier: int = 0


class DiceRoll(BaseModel):
    """A roll broken down for display."""

    total: int
    rolls: list[int]
    modifier: int = 0


def parse_dice_notation(notation: str) -> DiceNotation | None:
    """Parse *notation* into its parts, or ``None`` if it is not dice notation."""
    match = _DICE_RE.search(notation)
    if match is None:
        return None
    return DiceNotation(
        count=int(match.group(1)),
        sides=int(match.group(2)),
        modifier=int(match.group(3)) if match.group(3) else 0,
    )


def _parse_int(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group(0)) if match else 0


class DiceRoller:
    """Rolls dice notation against a :class:`GameRNG`.

    Plain integers (``"3"``) roll as themselves; anything unparseable rolls 0.
    Dice with fewer than one side roll 0 each.  Totals never go below 0.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        if rng is None:
            # Deferred: sim.core imports this module.
            from bead_tactics.sim.core.rng import GameRNG

            rng = GameRNG()
        self._rng = rng

    def roll(self, notation: str | int) -> int:
        return self.roll_detailed(notation).total

    def roll_detailed(self, notation: str | int) -> DiceRoll:
        if isinstance(notation, int):
            return DiceRoll(total=max(0, notation), rolls=[])

        parsed = parse_dice_notation(notation)
        if parsed is None:
            return DiceRoll(total=max(0, _parse_int(notation)), rolls=[])

        if parsed.sides < 1:
            rolls = [0] * parsed.count
        else:
            rolls = [self._rng.random_int(1, parsed.sides) for _ in range(parsed.count)]
        total = max(0, sum(rolls) + parsed.modifier)
        return DiceRoll(total=total, rolls=rolls, modifier=parsed.modifier)
