"""Grid coordinates and arena definitions."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Position(BaseModel):
    """An integer ``(x, y)`` cell on the battle grid.  Compared by value."""

    model_config = {"frozen": True}

    x: int
    y: int

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class ArenaDefinition(BaseModel):
    """A rectangular battlefield with optional spawn points."""

    id: str
    name: str
    description: str | None = None
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    player_spawns: list[Position] | None = None
    """Spawn cells for the party, in hero order.  ``None`` uses the
    builder's default spawns."""

    monster_spawn: Position | None = None
    """Spawn cell for the monster.  ``None`` uses the builder's default."""
