"""Tests for monster targeting helpers."""

from bead_tactics.ir.arenas import Position
from bead_tactics.sim.core.entities import Entity
from bead_tactics.sim.core.grid import BattleGrid
from bead_tactics.sim.mechanics.targeting import find_closest_target, step_toward


def _grid_with(**positions) -> BattleGrid:
    grid = BattleGrid(9, 9)
    for entity_id, (x, y) in positions.items():
        grid.register(entity_id, x, y)
    return grid


class TestFindClosestTarget:
    def test_picks_nearest(self):
        grid = _grid_with(m=(5, 5), a=(0, 0), b=(5, 7))
        a, b = Entity("a", 5, grid), Entity("b", 5, grid)
        assert find_closest_target(grid, "m", [a, b]) is b

    def test_first_wins_ties(self):
        grid = _grid_with(m=(5, 5), a=(5, 3), b=(5, 7))
        a, b = Entity("a", 5, grid), Entity("b", 5, grid)
        assert find_closest_target(grid, "m", [a, b]) is a

    def test_skips_dead_and_unplaced(self):
        grid = _grid_with(m=(5, 5), a=(5, 4))
        a, ghost = Entity("a", 1, grid), Entity("ghost", 5, grid)
        a.receive_attack(1)
        assert find_closest_target(grid, "m", [a, ghost]) is None


class TestStepToward:
    def test_horizontal_first(self):
        grid = _grid_with(m=(5, 5), t=(2, 2))
        assert step_toward(grid, "m", "t") == Position(x=4, y=5)

    def test_vertical_when_horizontal_blocked(self):
        grid = _grid_with(m=(5, 5), t=(2, 2), wall=(4, 5))
        assert step_toward(grid, "m", "t") == Position(x=5, y=4)

    def test_vertical_when_aligned(self):
        grid = _grid_with(m=(5, 5), t=(5, 1))
        assert step_toward(grid, "m", "t") == Position(x=5, y=4)

    def test_no_step_when_boxed_in(self):
        grid = _grid_with(m=(5, 5), t=(2, 2), w1=(4, 5), w2=(5, 4))
        assert step_toward(grid, "m", "t") is None
