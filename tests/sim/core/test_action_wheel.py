"""Tests for ActionWheel -- turn order on the eight-segment wheel."""

import pytest

from bead_tactics.sim.core.action_wheel import ActionWheel


class TestTurnOrder:
    def test_lowest_segment_then_arrival(self):
        wheel = ActionWheel()
        wheel.add_entity("hero-0", 0)
        wheel.add_entity("monster", 0)

        assert wheel.get_next_actor() == "hero-0"
        wheel.advance_entity("hero-0", 2)
        assert wheel.get_next_actor() == "monster"

    def test_advanced_entity_is_newest_arrival(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 2)
        wheel.add_entity("b", 0)
        wheel.advance_entity("b", 2)

        # Both on segment 2: "a" arrived first.
        assert wheel.get_next_actor() == "a"
        assert [e.id for e in wheel.get_entities_at_position(2)] == ["a", "b"]

    def test_position_wraps_at_eight(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 6)
        wheel.advance_entity("a", 3)
        assert wheel.get_position("a") == 1

    def test_add_wraps_position(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 10)
        assert wheel.get_position("a") == 2

    def test_same_cost_from_same_state_same_position(self):
        first, second = ActionWheel(), ActionWheel()
        for wheel in (first, second):
            wheel.add_entity("a", 5)
            wheel.advance_entity("a", 7)
        assert first.get_position("a") == second.get_position("a") == 4

    def test_empty_wheel_has_no_actor(self):
        assert ActionWheel().get_next_actor() is None

    def test_arrival_counter_is_global(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 0)
        wheel.add_entity("b", 0)
        wheel.advance_entity("a", 0)

        assert wheel.get_arrival_order("a") == 2
        assert wheel.get_next_actor() == "b"


class TestErrors:
    def test_duplicate_id_raises(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 0)
        with pytest.raises(ValueError, match="already exists"):
            wheel.add_entity("a", 3)

    def test_advancing_absent_entity_raises(self):
        with pytest.raises(ValueError, match="does not exist"):
            ActionWheel().advance_entity("ghost", 1)

    def test_remove_unknown_is_ignored(self):
        wheel = ActionWheel()
        wheel.remove_entity("ghost")
        assert len(wheel) == 0


class TestQueries:
    def test_get_all_entities_returns_copies(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 1)
        entries = wheel.get_all_entities()
        entries[0].position = 7

        assert wheel.get_position("a") == 1

    def test_has_entity_and_unknown_position(self):
        wheel = ActionWheel()
        wheel.add_entity("a", 1)

        assert wheel.has_entity("a")
        assert not wheel.has_entity("b")
        assert wheel.get_position("b") is None
