"""Tests for BattleGrid -- positions, occupancy and movement."""

import pytest

from bead_tactics.ir.arenas import Position
from bead_tactics.sim.core.grid import BattleGrid


@pytest.fixture
def grid() -> BattleGrid:
    g = BattleGrid(9, 9)
    g.register("hero-0", 1, 1)
    g.register("monster", 1, 2)
    return g


# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------

class TestMoveEntity:
    def test_move_out_of_bounds(self, grid):
        result = grid.move_entity("hero-0", Position(x=10, y=1))

        assert result.success is False
        assert result.reason == "out of bounds"
        assert grid.get_position("hero-0") == Position(x=1, y=1)

    def test_move_onto_occupied_cell(self, grid):
        result = grid.move_entity("hero-0", Position(x=1, y=2))

        assert result.success is False
        assert result.reason == "occupied"
        assert grid.get_position("hero-0") == Position(x=1, y=1)
        assert grid.get_entity_at(1, 2) == "monster"

    def test_successful_move_updates_both_indexes(self, grid):
        dest = Position(x=4, y=6)
        result = grid.move_entity("hero-0", dest)

        assert result.success
        assert grid.get_position("hero-0") == dest
        assert grid.get_entity_at(4, 6) == "hero-0"
        assert grid.get_entity_at(1, 1) is None

    def test_move_onto_own_cell_is_allowed(self, grid):
        result = grid.move_entity("hero-0", Position(x=1, y=1))

        assert result.success
        assert grid.get_entity_at(1, 1) == "hero-0"

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (9, 0), (0, 9)])
    def test_every_edge_is_a_bound(self, grid, x, y):
        assert grid.move_entity("hero-0", Position(x=x, y=y)).reason == "out of bounds"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

class TestQueries:
    def test_distance_is_manhattan(self, grid):
        grid.register("hero-1", 4, 5)
        assert grid.get_distance("hero-0", "hero-1") == 7

    def test_distance_to_unknown_entity_is_sentinel(self, grid):
        assert grid.get_distance("hero-0", "ghost") == -1
        assert grid.is_adjacent("hero-0", "ghost") is False

    def test_adjacency_matches_distance_one(self, grid):
        grid.register("hero-1", 2, 2)
        ids = grid.entity_ids
        for a in ids:
            for b in ids:
                assert grid.is_adjacent(a, b) == (grid.get_distance(a, b) == 1)

    def test_diagonal_is_not_adjacent(self, grid):
        grid.register("hero-1", 2, 2)
        assert grid.is_adjacent("hero-0", "hero-1") is False

    def test_valid_moves_exclude_occupied_and_own_cell(self, grid):
        moves = grid.get_valid_moves("hero-0", 1)

        assert Position(x=1, y=2) not in moves
        assert Position(x=1, y=1) not in moves
        assert set(moves) == {Position(x=0, y=1), Position(x=2, y=1), Position(x=1, y=0)}

    def test_valid_moves_respect_bounds_and_range(self):
        g = BattleGrid(3, 3)
        g.register("a", 0, 0)
        moves = g.get_valid_moves("a", 2)

        assert all(g.is_in_bounds(p.x, p.y) for p in moves)
        assert all(abs(p.x) + abs(p.y) <= 2 for p in moves)
        assert len(moves) == 5

    def test_valid_moves_for_unknown_entity(self, grid):
        assert grid.get_valid_moves("ghost", 3) == []

    def test_unregister_frees_the_cell(self, grid):
        grid.unregister("monster")

        assert grid.get_position("monster") is None
        assert grid.get_entity_at(1, 2) is None
        assert "monster" not in grid.entity_ids

    def test_register_again_moves_the_entity(self, grid):
        grid.register("hero-0", 5, 5)

        assert grid.get_entity_at(1, 1) is None
        assert grid.get_entity_at(5, 5) == "hero-0"

    def test_register_onto_occupied_cell_raises(self, grid):
        with pytest.raises(ValueError, match="already held by 'monster'"):
            grid.register("hero-1", 1, 2)

        assert grid.get_position("hero-1") is None
        assert grid.get_entity_at(1, 2) == "monster"
        assert grid.get_position("monster") == Position(x=1, y=2)
