"""Bead containers -- the draw/spend/discard cycle behind every bead economy.

Three building blocks compose into both bead systems in a battle:

* :class:`BeadPile` -- a plain stash you add to and remove from (a hand, a
  discard pile).
* :class:`BeadPool` -- a bag you draw from.  When it runs dry it reshuffles
  its linked discard pile back in.  Drawing does *not* put the bead
  anywhere; the caller decides where it goes.
* :class:`PlayerBeadSystem` -- pool -> hand -> discard for a hero.  The
  monster's bag is pool -> (consumed) -> discard, wired up in
  :class:`~bead_tactics.sim.core.entities.MonsterEntity`.
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from bead_tactics.ir.actions import ActionCost
from bead_tactics.ir.beads import BEAD_COLORS, BeadColor, BeadCounts

logger = logging.getLogger(__name__)

RandomFn = Callable[[], float]
"""Zero-argument callable returning a float in ``[0.0, 1.0)``."""

_DEFAULT_PLAYER_BEADS = BeadCounts(red=3, blue=3, green=3, white=3)


def select_random_bead(counts: BeadCounts, random_fn: RandomFn) -> BeadColor | None:
    """Pick a color with probability proportional to its count.

    ``roll = random_fn() * total``; colors are accumulated in the fixed order
    red, blue, green, white and the first color whose running total exceeds
    the roll wins.  Does not modify *counts*.  Returns ``None`` if *counts*
    is empty.
    """
    total = counts.total
    if total == 0:
        return None

    roll = random_fn() * total
    cumulative = 0
    for color in BEAD_COLORS:
        cumulative += counts.get(color)
        if roll < cumulative:
            return color

    # Only reachable if random_fn() returned >= 1.0: take the last non-empty
    # color.
    for color in reversed(BEAD_COLORS):
        if counts.get(color) > 0:
            return color
    return None


# ---------------------------------------------------------------------------
# BeadPile
# ---------------------------------------------------------------------------

class BeadPile:
    """A simple collection of beads (hand or discard pile)."""

    def __init__(self, initial: BeadCounts | None = None) -> None:
        self._beads: dict[BeadColor, int] = {
            color: (initial.get(color) if initial is not None else 0)
            for color in BEAD_COLORS
        }

    def add(self, color: BeadColor | str, count: int = 1) -> None:
        color = BeadColor(color)
        self._beads[color] += count

    def remove(self, color: BeadColor | str, count: int = 1) -> bool:
        """Remove *count* beads of *color*.  Returns False (and removes
        nothing) if the pile holds fewer than *count*."""
        color = BeadColor(color)
        if self._beads[color] < count:
            return False
        self._beads[color] -= count
        return True

    def get_counts(self) -> BeadCounts:
        return BeadCounts(**{color.value: n for color, n in self._beads.items()})

    @property
    def total(self) -> int:
        return sum(self._beads.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def clear(self) -> BeadCounts:
        """Empty the pile and return what it held."""
        counts = self.get_counts()
        for color in BEAD_COLORS:
            self._beads[color] = 0
        return counts

    def __repr__(self) -> str:
        return f"BeadPile({self.get_counts()!r})"


# ---------------------------------------------------------------------------
# BeadPool
# ---------------------------------------------------------------------------

class BeadPool:
    """A bag of beads drawn at random, refilled from a linked discard pile.

    Parameters
    ----------
    initial:
        Starting bead counts.  Must contain at least one bead.
    discard:
        The pile reshuffled back in when the pool is empty.
    random_fn:
        Source of floats in ``[0.0, 1.0)``.  Defaults to :func:`random.random`.

    Raises
    ------
    ValueError
        If *initial* holds no beads.
    """

    def __init__(
        self,
        initial: BeadCounts,
        discard: BeadPile,
        random_fn: RandomFn | None = None,
    ) -> None:
        if initial.total == 0:
            raise ValueError("Cannot create empty bead pool")
        self._remaining: dict[BeadColor, int] = {
            color: initial.get(color) for color in BEAD_COLORS
        }
        self._discard = discard
        self._random_fn: RandomFn = random_fn or random.random

    # -- drawing -------------------------------------------------------------

    def draw(self) -> BeadColor:
        """Draw one bead, reshuffling the discard pile in first if the pool
        is empty.  The bead is *not* added to any pile.

        Raises
        ------
        ValueError
            If both the pool and the discard pile are empty (every bead is
            held elsewhere, e.g. in a hand).
        """
        if self.is_empty:
            self._reshuffle()
        color = select_random_bead(self.get_remaining_counts(), self._random_fn)
        if color is None:
            raise ValueError("Cannot draw: bead pool and discard pile are both empty")
        self._remaining[color] -= 1
        return color

    def _reshuffle(self) -> None:
        """Move every bead from the discard pile back into the pool."""
        discarded = self._discard.clear()
        for color in BEAD_COLORS:
            self._remaining[color] += discarded.get(color)
        logger.debug("Reshuffled %d beads from discard into pool", discarded.total)

    # -- queries -------------------------------------------------------------

    def get_remaining_counts(self) -> BeadCounts:
        return BeadCounts(**{color.value: n for color, n in self._remaining.items()})

    @property
    def total_remaining(self) -> int:
        return sum(self._remaining.values())

    @property
    def is_empty(self) -> bool:
        return self.total_remaining == 0

    def __repr__(self) -> str:
        return f"BeadPool({self.get_remaining_counts()!r})"


# ---------------------------------------------------------------------------
# PlayerBeadSystem
# ---------------------------------------------------------------------------

class PlayerBeadSystem:
    """A hero's beads: pool -> hand -> discard.

    Heroes draw beads from the pool into their hand and spend beads from the
    hand into the discard pile.  When the pool runs dry the discard pile is
    reshuffled back into it.
    """

    def __init__(
        self,
        initial: BeadCounts | None = None,
        random_fn: RandomFn | None = None,
    ) -> None:
        self._discard = BeadPile()
        self._hand = BeadPile()
        self._pool = BeadPool(initial or _DEFAULT_PLAYER_BEADS, self._discard, random_fn)

    # -- mutations -----------------------------------------------------------

    def draw_to_hand(self, count: int) -> list[BeadColor]:
        """Draw *count* beads from the pool into the hand and return them."""
        drawn: list[BeadColor] = []
        for _ in range(count):
            color = self._pool.draw()
            self._hand.add(color)
            drawn.append(color)
        return drawn

    def spend(self, color: BeadColor | str) -> bool:
        """Move one bead of *color* from hand to discard.  False if the hand
        has none."""
        if not self._hand.remove(color):
            return False
        self._discard.add(color)
        return True

    def spend_cost(self, cost: BeadCounts) -> bool:
        """Spend every bead in *cost*, or nothing if the hand cannot cover it."""
        if not self.can_afford(cost):
            return False
        for color in BEAD_COLORS:
            for _ in range(cost.get(color)):
                self.spend(color)
        return True

    # -- queries -------------------------------------------------------------

    def can_afford(self, cost: BeadCounts) -> bool:
        hand = self._hand.get_counts()
        return all(hand.get(color) >= cost.get(color) for color in BEAD_COLORS)

    def get_hand_counts(self) -> BeadCounts:
        return self._hand.get_counts()

    def get_bag_counts(self) -> BeadCounts:
        return self._pool.get_remaining_counts()

    def get_discarded_counts(self) -> BeadCounts:
        return self._discard.get_counts()

    @property
    def hand_total(self) -> int:
        return self._hand.total

    @property
    def bag_total(self) -> int:
        return self._pool.total_remaining

    @property
    def is_empty(self) -> bool:
        """True if the pool (not the hand) is empty."""
        return self._pool.is_empty


# ---------------------------------------------------------------------------
# Affordability
# ---------------------------------------------------------------------------

def can_afford(available: ActionCost, required: ActionCost) -> bool:
    """Check time and every bead color; missing colors count as 0."""
    if available.time < required.time:
        return False
    have = available.bead_counts()
    need = required.bead_counts()
    return all(have.get(color) >= need.get(color) for color in BEAD_COLORS)


def bead_counts_to_action_cost(beads: BeadCounts, available_time: int) -> ActionCost:
    """Express a hand plus available time as an :class:`ActionCost`."""
    return ActionCost(time=available_time, **{c.value: beads.get(c) for c in BEAD_COLORS})
