"""Publish/subscribe surface for battle state changes.

Subscribers register a partial handler set keyed by event name and receive
only those events.  Handlers are called synchronously in subscription
order.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from bead_tactics.ir.beads import BeadCounts

Handler = Callable[..., Any]

EVENT_NAMES: frozenset[str] = frozenset({
    "actor_changed",
    "selection_changed",
    "wheel_advanced",
    "hero_health_changed",
    "hero_beads_changed",
    "hero_moved",
    "monster_health_changed",
    "monster_beads_changed",
    "monster_moved",
})


class BattleStateObserver:
    """Fan-out of state-change notifications to independent subscribers."""

    def __init__(self) -> None:
        self._subscribers: dict[int, dict[str, Handler]] = {}
        self._next_id = 0

    def subscribe(self, handlers: Mapping[str, Handler]) -> int:
        """Register *handlers* and return an id for :meth:`unsubscribe`.

        Raises
        ------
        ValueError
            If a key is not a known event name.
        """
        unknown = sorted(set(handlers) - EVENT_NAMES)
        if unknown:
            raise ValueError(f"Unknown observer event(s): {', '.join(unknown)}")
        subscriber_id = self._next_id
        self._next_id += 1
        self._subscribers[subscriber_id] = dict(handlers)
        return subscriber_id

    def unsubscribe(self, subscriber_id: int) -> None:
        self._subscribers.pop(subscriber_id, None)

    def __len__(self) -> int:
        return len(self._subscribers)

    def _emit(self, event: str, *args: Any) -> None:
        for handlers in list(self._subscribers.values()):
            handler = handlers.get(event)
            if handler is not None:
                handler(*args)

    # -- turn / selection ----------------------------------------------------

    def emit_actor_changed(self, actor_id: str | None) -> None:
        self._emit("actor_changed", actor_id)

    def emit_selection_changed(self, character_id: str | None) -> None:
        self._emit("selection_changed", character_id)

    def emit_wheel_advanced(self, entity_id: str, new_position: int) -> None:
        self._emit("wheel_advanced", entity_id, new_position)

    # -- heroes --------------------------------------------------------------

    def emit_hero_health_changed(self, hero_id: str, current: int, maximum: int) -> None:
        self._emit("hero_health_changed", hero_id, current, maximum)

    def emit_hero_beads_changed(self, hero_id: str, counts: BeadCounts) -> None:
        self._emit("hero_beads_changed", hero_id, counts)

    def emit_hero_moved(self, hero_id: str, x: int, y: int) -> None:
        self._emit("hero_moved", hero_id, x, y)

    # -- monster -------------------------------------------------------------

    def emit_monster_health_changed(self, current: int, maximum: int) -> None:
        self._emit("monster_health_changed", current, maximum)

    def emit_monster_beads_changed(self, counts: BeadCounts | None) -> None:
        self._emit("monster_beads_changed", counts)

    def emit_monster_moved(self, x: int, y: int) -> None:
        self._emit("monster_moved", x, y)
