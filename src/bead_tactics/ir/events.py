"""Animation events -- pure output describing what happened during a turn.

Events are produced by the engine after the state change they describe has
been applied, and are never read back by the engine.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .arenas import Position
from .beads import BeadColor


class MoveEvent(BaseModel):
    type: Literal["move"] = "move"
    entity_id: str
    from_position: Position = Field(alias="from")
    to: Position

    model_config = {"frozen": True, "populate_by_name": True}


class AttackEvent(BaseModel):
    type: Literal["attack"] = "attack"
    attacker_id: str
    target_id: str
    damage: int

    model_config = {"frozen": True}


class DamageEvent(BaseModel):
    type: Literal["damage"] = "damage"
    entity_id: str
    new_health: int
    max_health: int

    model_config = {"frozen": True}


class BeadDrawEvent(BaseModel):
    type: Literal["beadDraw"] = "beadDraw"
    color: BeadColor

    model_config = {"frozen": True}


class StateChangeEvent(BaseModel):
    type: Literal["stateChange"] = "stateChange"
    from_state: str
    to_state: str

    model_config = {"frozen": True}


class RestEvent(BaseModel):
    type: Literal["rest"] = "rest"
    entity_id: str
    beads_drawn: list[BeadColor] = Field(default_factory=list)

    model_config = {"frozen": True}


AnimationEvent = Annotated[
    Union[MoveEvent, AttackEvent, DamageEvent, BeadDrawEvent, StateChangeEvent, RestEvent],
    Field(discriminator="type"),
]
