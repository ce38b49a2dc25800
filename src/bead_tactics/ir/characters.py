"""Character classes and equipment."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .beads import BeadCounts

DEFAULT_INNATE_ACTIONS: tuple[str, ...] = ("move", "run", "attack", "rest")


class EquipmentSlot(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    TRINKET = "trinket"


class EquipmentDefinition(BaseModel):
    """An item that grants extra action ids while equipped."""

    model_config = {"frozen": True}

    id: str
    name: str
    slot: EquipmentSlot
    actions: list[str] = Field(default_factory=list)
    description: str | None = None


class CharacterStats(BaseModel):
    health: int = Field(gt=0)
    speed: int | None = None
    damage: str | None = None
    """Dice notation (e.g. ``"1d6"``), informational for the UI."""
    range: int | None = None
    armor: int | None = None


class CharacterClass(BaseModel):
    """A playable hero class."""

    id: str
    name: str
    description: str | None = None
    stats: CharacterStats

    beads: BeadCounts | None = None
    """Starting bead bag.  ``None`` uses the engine default (3 of each)."""

    innate_actions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INNATE_ACTIONS)
    )
    equipment: list[EquipmentDefinition] = Field(default_factory=list)
