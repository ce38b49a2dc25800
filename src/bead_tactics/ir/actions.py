"""Action definitions -- the data-driven description of everything a hero can do.

An action is a sequence of effects (``move``, ``attack``, ``drawBeads``, ...)
plus the parameter prompts needed to fill in their params and the cost paid
to perform it.  Effect params may contain ``$references``:

* ``$key`` -- the value collected for the parameter prompt ``key``.
* ``$effectId.field`` -- ``data[field]`` of an effect that already ran in the
  same action.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from .beads import BEAD_COLORS, BeadCounts


class ActionCategory(str, Enum):
    """Grouping used by the UI to tab actions."""

    MOVEMENT = "movement"
    ATTACK = "attack"
    OTHER = "other"


class ActionCost(BaseModel):
    """Time (wheel segments) plus optional bead costs."""

    model_config = {"frozen": True}

    time: int = 0
    red: int | None = None
    blue: int | None = None
    green: int | None = None
    white: int | None = None

    def bead_counts(self) -> BeadCounts:
        """Return the bead part of the cost, missing colors counted as 0."""
        return BeadCounts(
            **{color.value: getattr(self, color.value) or 0 for color in BEAD_COLORS}
        )

    def merged(self, other: ActionCost | None) -> ActionCost:
        """Return a new cost with *other* added per color and time."""
        if other is None:
            return self
        merged: dict[str, int | None] = {"time": self.time + other.time}
        for color in BEAD_COLORS:
            mine = getattr(self, color.value)
            theirs = getattr(other, color.value)
            if mine is None and theirs is None:
                merged[color.value] = None
            else:
                merged[color.value] = (mine or 0) + (theirs or 0)
        return ActionCost(**merged)


# ---------------------------------------------------------------------------
# Parameter prompts
# ---------------------------------------------------------------------------

class TilePrompt(BaseModel):
    """Ask for a grid cell."""

    model_config = {"frozen": True}

    type: Literal["tile"] = "tile"
    key: str
    prompt: str = ""
    range: int | None = None
    filter: Literal["empty", "any"] | None = None
    optional: bool = False


class EntityPrompt(BaseModel):
    """Ask for a character or the monster."""

    model_config = {"frozen": True}

    type: Literal["entity"] = "entity"
    key: str
    prompt: str = ""
    filter: Literal["enemy", "ally", "any"] = "any"
    range: int | None = None
    optional: bool = False


class OptionChoice(BaseModel):
    """One selectable option, with its own (partial) cost."""

    model_config = {"frozen": True}

    id: str
    label: str = ""
    cost: ActionCost | None = None


class OptionPrompt(BaseModel):
    """Ask for one or more option ids."""

    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["option"] = "option"
    key: str
    prompt: str = ""
    optional: bool = False
    multi_select: bool = Field(default=False, alias="multiSelect")
    options: list[OptionChoice] = Field(default_factory=list)

    def get_choice(self, option_id: str) -> OptionChoice | None:
        for choice in self.options:
            if choice.id == option_id:
                return choice
        return None


ParameterPrompt = Annotated[
    Union[TilePrompt, EntityPrompt, OptionPrompt],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Effects and options
# ---------------------------------------------------------------------------

class EffectDefinition(BaseModel):
    """One step of an action: an effect ``type`` and its (unresolved) params."""

    model_config = {"frozen": True}

    id: str
    type: str
    params: dict[str, Any] = Field(default_factory=dict)


class OptionDefinition(BaseModel):
    """What selecting an option does to the effect chain."""

    model_config = {"frozen": True}

    modifies: str | list[str] | None = None
    """Effect id(s) that receive ``modifier`` when this option is selected."""

    modifier: dict[str, Any] = Field(default_factory=dict)

    adds: list[EffectDefinition] = Field(default_factory=list)
    """Extra effects appended to the chain when this option is selected."""

    def modified_effect_ids(self) -> list[str]:
        if self.modifies is None:
            return []
        if isinstance(self.modifies, str):
            return [self.modifies]
        return list(self.modifies)


class ActionDefinition(BaseModel):
    """Complete, immutable definition of an action."""

    model_config = {"frozen": True}

    id: str
    name: str
    category: ActionCategory = ActionCategory.OTHER
    description: str | None = None
    cost: ActionCost = Field(default_factory=ActionCost)
    parameters: list[ParameterPrompt] = Field(default_factory=list)
    effects: list[EffectDefinition] = Field(default_factory=list)
    options: dict[str, OptionDefinition] | None = None
    """Keyed by option id (matching an ``OptionChoice.id``)."""

    def get_parameter(self, key: str) -> TilePrompt | EntityPrompt | OptionPrompt | None:
        for prompt in self.parameters:
            if prompt.key == key:
                return prompt
        return None

    @property
    def range(self) -> int:
        """Range of the first tile or entity prompt (1 if none declares one)."""
        for prompt in self.parameters:
            if isinstance(prompt, (TilePrompt, EntityPrompt)):
                return prompt.range if prompt.range is not None else 1
        return 1
