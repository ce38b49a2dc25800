"""Telemetry data models for per-battle statistics.

These lightweight dataclasses capture everything needed to judge how a
monster and a party match up without storing the whole battle history.
``BattleTelemetry`` is a plain ``dataclass`` (not a Pydantic model) to keep
collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BattleTelemetry:
    """Stats from a single battle.

    Attributes
    ----------
    seed:
        The master RNG seed the battle was built from.
    result:
        ``"victory"``, ``"defeat"``, or ``"ongoing"`` if the turn cap was hit.
    turns:
        Number of completed turns (heroes and monster).
    monster_hp_end:
        Monster health when the battle stopped.
    party_hp_end:
        Hero id -> health when the battle stopped.
    damage_dealt:
        Total health the heroes took off the monster.
    damage_taken:
        Total health the monster took off the heroes.
    actions_by_id:
        Committed hero actions: ``action_id -> count``.
    monster_states:
        The monster's AI state after each of its turns, in order.
    """

    seed: int
    result: str
    turns: int
    monster_hp_end: int
    party_hp_end: dict[str, int] = field(default_factory=dict)
    damage_dealt: int = 0
    damage_taken: int = 0
    actions_by_id: dict[str, int] = field(default_factory=dict)
    monster_states: list[str] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.result == "victory"
