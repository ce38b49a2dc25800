"""Bead colors and bead counts -- the resource currency of a battle."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BeadColor(str, Enum):
    """The four bead colors.  This is the complete and only color set."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    WHITE = "white"


BEAD_COLORS: tuple[BeadColor, ...] = (
    BeadColor.RED,
    BeadColor.BLUE,
    BeadColor.GREEN,
    BeadColor.WHITE,
)
"""Fixed iteration order used by every weighted draw."""


class BeadCounts(BaseModel):
    """Non-negative bead counts by color."""

    red: int = Field(default=0, ge=0)
    blue: int = Field(default=0, ge=0)
    green: int = Field(default=0, ge=0)
    white: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.red + self.blue + self.green + self.white

    def get(self, color: BeadColor | str) -> int:
        """Return the count for *color*."""
        return getattr(self, BeadColor(color).value)

    def as_dict(self) -> dict[BeadColor, int]:
        return {color: self.get(color) for color in BEAD_COLORS}
