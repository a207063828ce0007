"""
Tests for the cave cellular automaton.
"""

import random

import pytest

from cavegen.level.cave_automaton import CaveAutomaton, GridIndexError


@pytest.fixture
def empty_automaton() -> CaveAutomaton:
    """5x5 all-floor grid."""
    return CaveAutomaton(5, 5, alive_probability=0.0, rng=random.Random(1))


class TestInitialization:
    """Initial randomization of the grid."""

    def test_dimensions(self):
        automaton = CaveAutomaton(7, 11, rng=random.Random(3))
        assert len(automaton.grid) == 7
        assert all(len(row) == 11 for row in automaton.grid)

    def test_zero_probability_is_all_floor(self, empty_automaton):
        assert not any(cell for row in empty_automaton.grid for cell in row)

    def test_full_probability_is_all_wall(self):
        automaton = CaveAutomaton(6, 6, alive_probability=1.0, rng=random.Random(3))
        assert all(cell for row in automaton.grid for cell in row)

    def test_same_seed_same_grid(self):
        a = CaveAutomaton(20, 30, rng=random.Random(42))
        b = CaveAutomaton(20, 30, rng=random.Random(42))
        assert a.grid == b.grid

    def test_invalid_probability_rejected(self):
        with pytest.raises(ValueError):
            CaveAutomaton(5, 5, alive_probability=1.5)

    def test_negative_dimensions_rejected(self):
        with pytest.raises(ValueError):
            CaveAutomaton(-1, 5)


class TestStep:
    """Birth/starvation rule, edge handling and buffering."""

    def test_edges_count_as_walls(self, empty_automaton):
        assert empty_automaton.count_wall_neighbors(0, 0) == 5
        assert empty_automaton.count_wall_neighbors(0, 2) == 3
        assert empty_automaton.count_wall_neighbors(2, 2) == 0

    def test_floor_corner_becomes_wall(self, empty_automaton):
        """A floor corner sees 5 off-grid walls, which exceeds the birth limit."""
        empty_automaton.step()
        grid = empty_automaton.grid
        assert grid[0][0] and grid[0][4] and grid[4][0] and grid[4][4]
        # Edge midpoints see exactly 3 walls: not more than the birth limit
        assert not grid[0][2]
        assert not grid[2][2]

    def test_isolated_wall_starves(self, empty_automaton):
        empty_automaton.mark(2, 2, True)
        empty_automaton.step()
        assert not empty_automaton.grid[2][2]

    def test_update_reads_previous_generation(self):
        """Cells must not see values written during the same step."""
        automaton = CaveAutomaton(3, 3, alive_probability=0.0, rng=random.Random(0))
        for r in range(3):
            automaton.mark(r, 0, True)
        automaton.step()
        # Centre sees column 0 (3 walls) and nothing else from the old grid
        assert not automaton.grid[1][1]

    def test_all_wall_is_stable(self):
        automaton = CaveAutomaton(8, 8, alive_probability=1.0, rng=random.Random(0))
        automaton.simulate(4)
        assert all(cell for row in automaton.grid for cell in row)

    def test_simulate_matches_repeated_step(self):
        a = CaveAutomaton(15, 15, rng=random.Random(9))
        b = CaveAutomaton(15, 15, rng=random.Random(9))
        a.simulate(3)
        for _ in range(3):
            b.step()
        assert a.grid == b.grid


class TestMutationAndBounds:
    """Single-cell access is bounds-checked."""

    def test_mark_and_read(self, empty_automaton):
        empty_automaton.mark(1, 3, True)
        assert empty_automaton.is_wall(1, 3)
        assert empty_automaton.grid[1][3]

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_out_of_range_mark(self, empty_automaton, row, col):
        with pytest.raises(GridIndexError):
            empty_automaton.mark(row, col, True)

    def test_out_of_range_is_index_error(self, empty_automaton):
        with pytest.raises(IndexError):
            empty_automaton.is_wall(9, 9)

    def test_out_of_range_neighbor_count(self, empty_automaton):
        with pytest.raises(GridIndexError):
            empty_automaton.count_wall_neighbors(5, 5)


class TestResize:
    """Truncation, padding and reinitialization."""

    def test_shrink_truncates_trailing_cells(self):
        automaton = CaveAutomaton(6, 6, alive_probability=1.0, rng=random.Random(0))
        automaton.resize(3, 4)
        assert automaton.height == 3 and automaton.width == 4
        assert automaton.grid == [[True] * 4 for _ in range(3)]

    def test_grow_pads_with_floor(self):
        automaton = CaveAutomaton(2, 2, alive_probability=1.0, rng=random.Random(0))
        automaton.resize(3, 4)
        assert automaton.grid == [
            [True, True, False, False],
            [True, True, False, False],
            [False, False, False, False],
        ]

    def test_non_positive_is_noop(self):
        automaton = CaveAutomaton(4, 4, rng=random.Random(5))
        before = [row[:] for row in automaton.grid]
        automaton.resize(0, 10)
        automaton.resize(10, -2)
        assert automaton.height == 4 and automaton.width == 4
        assert automaton.grid == before

    def test_reinitialize_rerandomizes(self):
        automaton = CaveAutomaton(2, 2, alive_probability=1.0, rng=random.Random(0))
        automaton.resize(4, 4, reinitialize=True)
        assert all(cell for row in automaton.grid for cell in row)

    def test_resized_bounds_are_enforced(self):
        automaton = CaveAutomaton(4, 4, rng=random.Random(5))
        automaton.resize(2, 2)
        with pytest.raises(GridIndexError):
            automaton.mark(3, 3, True)
