"""Top-level container for everything the data loader hands to the engine."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .actions import ActionDefinition
from .arenas import ArenaDefinition
from .characters import CharacterClass
from .monsters import MonsterDefinition


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for item in ids:
        if item in seen and item not in dupes:
            dupes.append(item)
        seen.add(item)
    return dupes


class ContentSet(BaseModel):
    """Already-parsed battle content: classes, monsters, arenas and actions."""

    classes: list[CharacterClass] = Field(default_factory=list)
    monsters: list[MonsterDefinition] = Field(default_factory=list)
    arenas: list[ArenaDefinition] = Field(default_factory=list)
    actions: list[ActionDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> "ContentSet":
        errors: list[str] = []
        for label, items in (
            ("class", self.classes),
            ("monster", self.monsters),
            ("arena", self.arenas),
            ("action", self.actions),
        ):
            for dupe in _duplicates([item.id for item in items]):
                errors.append(f"duplicate {label} id {dupe!r}")
        if errors:
            raise ValueError("; ".join(errors))
        return self

    @model_validator(mode="after")
    def _validate_monster_start_states(self) -> "ContentSet":
        for monster in self.monsters:
            if monster.start_state and monster.states is not None:
                if monster.start_state not in monster.states:
                    raise ValueError(
                        f"monster {monster.id!r}: start_state "
                        f"{monster.start_state!r} is not a defined state"
                    )
        return self
