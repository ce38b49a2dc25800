"""The action wheel -- circular turn-order scheduler.

Every combatant sits on one of eight wheel segments.  The combatant on the
lowest segment acts next; acting moves it forward by the action's time cost
(wrapping at 8).  Ties on a segment are broken FIFO by arrival order: an
entity that just advanced is the *newest* arrival at its new segment, so
anyone who got there earlier acts first and no actor is perpetually skipped.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_WHEEL_SIZE = 8


# ---------------------------------------------------------------------------
# WheelEntry (value object)
# ---------------------------------------------------------------------------

class WheelEntry(BaseModel):
    """An entity's place on the wheel.

    Parameters
    ----------
    id:
        Entity id (``"hero-0"``, ``"monster"``, ...).
    position:
        Wheel segment, always in ``0..7``.
    arrival_order:
        Global arrival counter value at the time the entity reached
        ``position``.  Lower arrived earlier.
    """

    id: str
    position: int
    arrival_order: int


# ---------------------------------------------------------------------------
# ActionWheel
# ---------------------------------------------------------------------------

class ActionWheel:
    """Eight-segment wheel of :class:`WheelEntry` objects.

    This is a plain Python class (not a Pydantic model) because it holds
    mutable internal state that should not be serialized.
    """

    def __init__(self) -> None:
        self._entries: dict[str, WheelEntry] = {}
        self._arrival_counter = 0

    # -- mutations -----------------------------------------------------------

    def add_entity(self, entity_id: str, position: int) -> None:
        """Place *entity_id* on segment ``position % 8``.

        Raises
        ------
        ValueError
            If the entity is already on the wheel.
        """
        if entity_id in self._entries:
            raise ValueError(f"Entity with id {entity_id!r} already exists on the wheel")
        self._entries[entity_id] = WheelEntry(
            id=entity_id,
            position=position % _WHEEL_SIZE,
            arrival_order=self._next_arrival(),
        )

    def remove_entity(self, entity_id: str) -> None:
        """Take *entity_id* off the wheel.  Unknown ids are ignored."""
        self._entries.pop(entity_id, None)

    def advance_entity(self, entity_id: str, cost: int) -> None:
        """Move *entity_id* forward by *cost* segments and make it the newest
        arrival at its new segment.

        Raises
        ------
        ValueError
            If the entity is not on the wheel.
        """
        entry = self._entries.get(entity_id)
        if entry is None:
            raise ValueError(f"Entity with id {entity_id!r} does not exist on the wheel")
        entry.position = (entry.position + cost) % _WHEEL_SIZE
        entry.arrival_order = self._next_arrival()
        logger.debug(
            "%s advanced by %d to segment %d", entity_id, cost, entry.position,
        )

    # -- queries -------------------------------------------------------------

    def get_next_actor(self) -> str | None:
        """Return the id on the lowest segment (earliest arrival wins ties),
        or ``None`` if the wheel is empty."""
        if not self._entries:
            return None
        best = min(
            self._entries.values(),
            key=lambda e: (e.position, e.arrival_order),
        )
        return best.id

    def get_entities_at_position(self, position: int) -> list[WheelEntry]:
        """Entries on *position*, earliest arrival first."""
        return sorted(
            (e for e in self._entries.values() if e.position == position),
            key=lambda e: e.arrival_order,
        )

    def get_position(self, entity_id: str) -> int | None:
        entry = self._entries.get(entity_id)
        return entry.position if entry is not None else None

    def get_arrival_order(self, entity_id: str) -> int | None:
        entry = self._entries.get(entity_id)
        return entry.arrival_order if entry is not None else None

    def get_all_entities(self) -> list[WheelEntry]:
        """Copies of every entry, in insertion order."""
        return [e.model_copy() for e in self._entries.values()]

    def has_entity(self, entity_id: str) -> bool:
        return entity_id in self._entries

    # -- internal helpers ----------------------------------------------------

    def _next_arrival(self) -> int:
        order = self._arrival_counter
        self._arrival_counter += 1
        return order

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ActionWheel(entities={len(self._entries)})"
