"""The battle grid -- single source of truth for entity positions.

Entities never store their own coordinates; they ask the grid.  The grid
keeps two indexes that are updated together inside every mutation:

* ``positions``: entity id -> :class:`Position` (authoritative)
* ``occupancy``: ``(x, y)`` -> entity id (derived)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from bead_tactics.ir.arenas import Position

logger = logging.getLogger(__name__)


class MoveResult(BaseModel):
    """Outcome of :meth:`BattleGrid.move_entity`."""

    success: bool
    reason: str | None = None
    """``"out of bounds"`` or ``"occupied"`` when ``success`` is False."""


class BattleGrid:
    """Bounded 2D position registry with movement validation and spatial
    queries.

    This is a plain Python class (not a Pydantic model) because it holds
    mutable internal indexes that should not be serialized.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._positions: dict[str, Position] = {}
        self._occupancy: dict[tuple[int, int], str] = {}

    # -- registration --------------------------------------------------------

    def register(self, entity_id: str, x: int, y: int) -> None:
        """Place *entity_id* at ``(x, y)`` without move validation (setup only).

        Re-registering an entity moves it.

        Raises
        ------
        ValueError
            If another entity already holds ``(x, y)``.
        """
        occupant = self._occupancy.get((x, y))
        if occupant is not None and occupant != entity_id:
            raise ValueError(f"Cell ({x}, {y}) is already held by {occupant!r}")
        previous = self._positions.get(entity_id)
        if previous is not None:
            self._occupancy.pop((previous.x, previous.y), None)
        self._positions[entity_id] = Position(x=x, y=y)
        self._occupancy[(x, y)] = entity_id

    def unregister(self, entity_id: str) -> None:
        """Remove *entity_id* from the grid.  Unknown ids are ignored."""
        position = self._positions.pop(entity_id, None)
        if position is not None:
            self._occupancy.pop((position.x, position.y), None)

    # -- queries -------------------------------------------------------------

    def get_position(self, entity_id: str) -> Position | None:
        return self._positions.get(entity_id)

    def get_entity_at(self, x: int, y: int) -> str | None:
        return self._occupancy.get((x, y))

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_distance(self, id1: str, id2: str) -> int:
        """Manhattan distance between two entities, or ``-1`` if either is
        not registered.  Callers must check for the sentinel."""
        pos1 = self._positions.get(id1)
        pos2 = self._positions.get(id2)
        if pos1 is None or pos2 is None:
            return -1
        return pos1.manhattan(pos2)

    def is_adjacent(self, id1: str, id2: str) -> bool:
        """Orthogonal adjacency only; diagonals are distance 2."""
        return self.get_distance(id1, id2) == 1

    def get_valid_moves(self, entity_id: str, move_range: int) -> list[Position]:
        """All free in-bounds cells within Manhattan *move_range* of the
        entity, excluding its own cell."""
        current = self._positions.get(entity_id)
        if current is None:
            return []

        moves: list[Position] = []
        for dx in range(-move_range, move_range + 1):
            for dy in range(-move_range, move_range + 1):
                if abs(dx) + abs(dy) > move_range:
                    continue
                if dx == 0 and dy == 0:
                    continue
                x, y = current.x + dx, current.y + dy
                if not self.is_in_bounds(x, y):
                    continue
                if (x, y) in self._occupancy:
                    continue
                moves.append(Position(x=x, y=y))
        return moves

    @property
    def entity_ids(self) -> list[str]:
        return list(self._positions)

    # -- movement ------------------------------------------------------------

    def move_entity(self, entity_id: str, dest: Position) -> MoveResult:
        """Move *entity_id* to *dest* if it is in bounds and free.

        A failed move leaves the grid untouched.
        """
        if not self.is_in_bounds(dest.x, dest.y):
            return MoveResult(success=False, reason="out of bounds")

        occupant = self._occupancy.get((dest.x, dest.y))
        if occupant is not None and occupant != entity_id:
            return MoveResult(success=False, reason="occupied")

        current = self._positions.get(entity_id)
        if current is not None:
            self._occupancy.pop((current.x, current.y), None)

        self._positions[entity_id] = dest
        self._occupancy[(dest.x, dest.y)] = entity_id
        logger.debug("%s moved %s -> %s", entity_id, current, dest)
        return MoveResult(success=True)

    def __repr__(self) -> str:
        return f"BattleGrid({self.width}x{self.height}, entities={len(self._positions)})"
