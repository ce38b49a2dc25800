"""Target selection and approach -- the monster's spatial reasoning."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from bead_tactics.ir.arenas import Position

if TYPE_CHECKING:
    from bead_tactics.sim.core.entities import Entity
    from bead_tactics.sim.core.grid import BattleGrid


def find_closest_target(
    grid: BattleGrid,
    source_id: str,
    targets: Sequence[Entity],
) -> Entity | None:
    """Return the living target with the smallest Manhattan distance to
    *source_id*.  The first one found wins ties.

    Targets not on the grid (distance ``-1``) are ignored.
    """
    closest: Entity | None = None
    closest_distance = -1
    for target in targets:
        if not target.is_alive:
            continue
        distance = grid.get_distance(source_id, target.id)
        if distance < 0:
            continue
        if closest is None or distance < closest_distance:
            closest = target
            closest_distance = distance
    return closest


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def step_toward(grid: BattleGrid, source_id: str, target_id: str) -> Position | None:
    """One greedy single-axis step from *source_id* toward *target_id*.

    Horizontal is tried first, then vertical; a step is taken only onto an
    in-bounds, unoccupied cell.  Returns ``None`` when neither step is
    possible.
    """
    here = grid.get_position(source_id)
    there = grid.get_position(target_id)
    if here is None or there is None:
        return None

    dx = _sign(there.x - here.x)
    dy = _sign(there.y - here.y)

    for step_x, step_y in ((dx, 0), (0, dy)):
        if step_x == 0 and step_y == 0:
            continue
        x, y = here.x + step_x, here.y + step_y
        if grid.is_in_bounds(x, y) and grid.get_entity_at(x, y) is None:
            return Position(x=x, y=y)
    return None
