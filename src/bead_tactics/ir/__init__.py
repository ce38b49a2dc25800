"""In-memory content schema for bead-tactics battles.

All battle content -- actions, character classes, monsters and arenas -- is
represented as Pydantic models.  The data loader (out of scope for the
engine) produces plain dicts; :class:`ContentSet` validates them into these
models, and the simulator consumes them.
"""

from .actions import (
    ActionCategory,
    ActionCost,
    ActionDefinition,
    EffectDefinition,
    EntityPrompt,
    OptionChoice,
    OptionDefinition,
    OptionPrompt,
    ParameterPrompt,
    TilePrompt,
)
from .arenas import ArenaDefinition, Position
from .beads import BEAD_COLORS, BeadColor, BeadCounts
from .characters import (
    CharacterClass,
    CharacterStats,
    EquipmentDefinition,
    EquipmentSlot,
)
from .content_set import ContentSet
from .events import (
    AnimationEvent,
    AttackEvent,
    BeadDrawEvent,
    DamageEvent,
    MoveEvent,
    RestEvent,
    StateChangeEvent,
)
from .monsters import MonsterDefinition, MonsterStateDefinition, MonsterStats

__all__ = [
    # actions
    "ActionCategory",
    "ActionCost",
    "ActionDefinition",
    "EffectDefinition",
    "EntityPrompt",
    "OptionChoice",
    "OptionDefinition",
    "OptionPrompt",
    "ParameterPrompt",
    "TilePrompt",
    # arenas
    "ArenaDefinition",
    "Position",
    # beads
    "BEAD_COLORS",
    "BeadColor",
    "BeadCounts",
    # characters
    "CharacterClass",
    "CharacterStats",
    "EquipmentDefinition",
    "EquipmentSlot",
    # content_set
    "ContentSet",
    # events
    "AnimationEvent",
    "AttackEvent",
    "BeadDrawEvent",
    "DamageEvent",
    "MoveEvent",
    "RestEvent",
    "StateChangeEvent",
    # monsters
    "MonsterDefinition",
    "MonsterStateDefinition",
    "MonsterStats",
]
