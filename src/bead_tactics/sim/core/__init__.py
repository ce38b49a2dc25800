"""Core simulation primitives for the bead-tactics battle simulator."""

from bead_tactics.sim.core.action_wheel import ActionWheel, WheelEntry
from bead_tactics.sim.core.battle_state import BattleState, GameContext
from bead_tactics.sim.core.entities import (
    AttackOutcome,
    Character,
    Entity,
    MonsterAction,
    MonsterEntity,
)
from bead_tactics.sim.core.grid import BattleGrid, MoveResult
from bead_tactics.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # grid
    "BattleGrid",
    "MoveResult",
    # action_wheel
    "ActionWheel",
    "WheelEntry",
    # entities
    "AttackOutcome",
    "Character",
    "Entity",
    "MonsterAction",
    "MonsterEntity",
    # battle_state
    "BattleState",
    "GameContext",
]
