"""Monster definitions, including the bead-driven state machine that is the
monster's entire AI personality.

Swapping the ``states`` table reskins a boss without touching code.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .beads import BeadCounts


class MonsterStats(BaseModel):
    health: int = Field(gt=0)
    armor: int | None = None
    speed: int | None = None


class MonsterStateDefinition(BaseModel):
    """One AI state: the attack it carries and where each bead color leads."""

    model_config = {"frozen": True}

    name: str = ""
    """Filled from the ``states`` mapping key when left empty."""

    damage: int | None = None
    wheel_cost: int | None = None
    range: int | None = None
    area: str | None = None
    transitions: dict[str, str] = Field(default_factory=dict)
    """Bead color -> target state name."""


class MonsterDefinition(BaseModel):
    """A boss as produced by the data loader."""

    id: str
    name: str
    description: str | None = None
    stats: MonsterStats

    beads: BeadCounts | None = None
    start_state: str | None = None
    states: dict[str, MonsterStateDefinition] | None = None

    @property
    def has_bead_ai(self) -> bool:
        """True when all three AI fields are configured."""
        return bool(self.beads and self.start_state and self.states)

    def state_definitions(self) -> list[MonsterStateDefinition]:
        """Return the states as a list, each named after its mapping key."""
        if not self.states:
            return []
        return [
            state.model_copy(update={"name": name})
            for name, state in self.states.items()
        ]
