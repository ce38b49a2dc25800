"""Tests for bead piles, pools and the player bead system."""

import pytest

from bead_tactics.ir.actions import ActionCost
from bead_tactics.ir.beads import BeadColor, BeadCounts
from bead_tactics.sim.mechanics.beads import (
    BeadPile,
    BeadPool,
    PlayerBeadSystem,
    bead_counts_to_action_cost,
    can_afford,
    select_random_bead,
)


def _always(value: float):
    return lambda: value


# ---------------------------------------------------------------------------
# Weighted selection
# ---------------------------------------------------------------------------

class TestSelectRandomBead:
    @pytest.mark.parametrize("roll, expected", [
        (0.0, BeadColor.RED),
        (0.24, BeadColor.RED),
        (0.25, BeadColor.BLUE),
        (0.5, BeadColor.GREEN),
        (0.99, BeadColor.WHITE),
    ])
    def test_cumulative_in_fixed_order(self, roll, expected):
        counts = BeadCounts(red=1, blue=1, green=1, white=1)
        assert select_random_bead(counts, _always(roll)) is expected

    def test_empty_counts(self):
        assert select_random_bead(BeadCounts(), _always(0.3)) is None

    @pytest.mark.parametrize("roll", [0.0, 0.3, 0.999999])
    def test_single_color_always_wins(self, roll):
        assert select_random_bead(BeadCounts(green=5), _always(roll)) is BeadColor.GREEN

    def test_roll_of_one_falls_back_to_last_color(self):
        counts = BeadCounts(red=2, blue=1)
        assert select_random_bead(counts, _always(1.0)) is BeadColor.BLUE


# ---------------------------------------------------------------------------
# BeadPile
# ---------------------------------------------------------------------------

class TestBeadPile:
    def test_add_remove(self):
        pile = BeadPile()
        pile.add(BeadColor.RED, 2)
        pile.add("white")

        assert pile.get_counts() == BeadCounts(red=2, white=1)
        assert pile.remove(BeadColor.RED)
        assert not pile.remove(BeadColor.BLUE)
        assert pile.total == 2

    def test_remove_more_than_held_changes_nothing(self):
        pile = BeadPile(BeadCounts(red=1))
        assert not pile.remove(BeadColor.RED, 2)
        assert pile.get_counts() == BeadCounts(red=1)

    def test_clear_returns_contents(self):
        pile = BeadPile(BeadCounts(blue=2, green=1))
        cleared = pile.clear()

        assert cleared == BeadCounts(blue=2, green=1)
        assert pile.is_empty


# ---------------------------------------------------------------------------
# BeadPool
# ---------------------------------------------------------------------------

class TestBeadPool:
    def test_empty_pool_raises(self):
        with pytest.raises(ValueError, match="empty bead pool"):
            BeadPool(BeadCounts(), BeadPile())

    def test_single_red_reshuffles_back(self):
        discard = BeadPile()
        pool = BeadPool(BeadCounts(red=1), discard, _always(0.7))

        assert pool.draw() is BeadColor.RED
        assert pool.is_empty

        discard.add(BeadColor.RED)
        assert pool.draw() is BeadColor.RED
        assert discard.is_empty

    def test_draw_with_nothing_left_raises(self):
        pool = BeadPool(BeadCounts(red=1), BeadPile(), _always(0.0))
        pool.draw()
        with pytest.raises(ValueError, match="both empty"):
            pool.draw()

    def test_reshuffle_conserves_total(self):
        discard = BeadPile()
        pool = BeadPool(BeadCounts(red=2, blue=1), discard, _always(0.0))
        for _ in range(3):
            discard.add(pool.draw())
        assert pool.total_remaining + discard.total == 3

        discard.add(pool.draw())
        assert pool.total_remaining + discard.total == 3
        assert pool.total_remaining == 2

    def test_draw_removes_from_pool(self):
        pool = BeadPool(BeadCounts(red=1, blue=2), BeadPile(), _always(0.99))

        assert pool.draw() is BeadColor.BLUE
        assert pool.get_remaining_counts() == BeadCounts(red=1, blue=1)


# ---------------------------------------------------------------------------
# PlayerBeadSystem
# ---------------------------------------------------------------------------

class TestPlayerBeadSystem:
    def test_default_bag_has_three_of_each(self):
        system = PlayerBeadSystem(random_fn=_always(0.0))
        assert system.get_bag_counts() == BeadCounts(red=3, blue=3, green=3, white=3)

    def test_spend_moves_to_discard(self):
        system = PlayerBeadSystem(BeadCounts(red=2), _always(0.0))
        system.draw_to_hand(2)

        assert system.spend(BeadColor.RED)
        assert system.get_hand_counts() == BeadCounts(red=1)
        assert system.get_discarded_counts() == BeadCounts(red=1)
        assert not system.spend(BeadColor.BLUE)

    def test_spend_cost_is_all_or_nothing(self):
        system = PlayerBeadSystem(BeadCounts(red=1, blue=1), _always(0.0))
        system.draw_to_hand(2)

        assert not system.spend_cost(BeadCounts(red=1, green=1))
        assert system.hand_total == 2

        assert system.spend_cost(BeadCounts(red=1, blue=1))
        assert system.hand_total == 0
        assert system.get_discarded_counts() == BeadCounts(red=1, blue=1)

    def test_drawing_past_bag_reshuffles_discard(self):
        system = PlayerBeadSystem(BeadCounts(white=2), _always(0.0))
        system.draw_to_hand(2)
        system.spend(BeadColor.WHITE)

        assert system.is_empty
        assert system.draw_to_hand(1) == [BeadColor.WHITE]
        assert system.get_hand_counts() == BeadCounts(white=2)

    def test_drawing_with_everything_in_hand_raises(self):
        system = PlayerBeadSystem(BeadCounts(white=1), _always(0.0))
        system.draw_to_hand(1)
        with pytest.raises(ValueError):
            system.draw_to_hand(1)


# ---------------------------------------------------------------------------
# Affordability
# ---------------------------------------------------------------------------

class TestCanAfford:
    def test_time_and_beads(self):
        available = bead_counts_to_action_cost(BeadCounts(red=1, green=2), 3)

        assert can_afford(available, ActionCost(time=3, red=1, green=2))
        assert not can_afford(available, ActionCost(time=4))
        assert not can_afford(available, ActionCost(time=1, blue=1))

    def test_missing_colors_count_as_zero(self):
        available = ActionCost(time=2)
        assert can_afford(available, ActionCost(time=2, red=None))
