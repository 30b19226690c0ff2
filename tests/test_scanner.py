"""Tests for directional line scanning and shared helpers."""

import numpy as np
import pytest

from dropfour.game import scanner
from dropfour.utils import (Direction, Player, has_connected_four, opponent_of,
                            parse_position)


class TestDirection:
    """Test the compass directions."""

    def test_north_decreases_row(self):
        assert (Direction.NORTH.dx, Direction.NORTH.dy) == (0, -1)

    def test_opposites(self):
        assert Direction.NORTH.opposite() == Direction.SOUTH
        assert Direction.NORTHEAST.opposite() == Direction.SOUTHWEST
        assert Direction.WEST.opposite() == Direction.EAST

    def test_eight_directions(self):
        assert len(Direction) == 8


class TestWalk:
    """Test line walking."""

    def test_walk_east(self):
        assert scanner.walk(2, 2, Direction.EAST, 3) == [(2, 2), (2, 3), (2, 4)]

    def test_walk_north(self):
        assert scanner.walk(2, 2, Direction.NORTH, 3) == [(2, 2), (1, 2), (0, 2)]

    def test_line_cells_clip_at_edge(self):
        """Cells past the board edge are dropped."""
        assert scanner.line_cells(0, 5, Direction.EAST, 4, 6, 7) == [(0, 5), (0, 6)]

    def test_full_line_inside_board(self):
        line = scanner.full_line(5, 0, Direction.NORTHEAST, 6, 7)
        assert line == [(5, 0), (4, 1), (3, 2), (2, 3)]

    def test_full_line_leaving_board(self):
        assert scanner.full_line(0, 5, Direction.EAST, 6, 7) is None
        assert scanner.full_line(1, 0, Direction.NORTH, 6, 7) is None

    def test_axis_cells_through_cell(self):
        """Both sides of the axis are walked and clipped."""
        assert scanner.axis_cells(0, 0, Direction.EAST, 3, 6, 7) == [(0, 0), (0, 1), (0, 2), (0, 3)]
        assert scanner.axis_cells(3, 3, Direction.SOUTH, 1, 6, 7) == [(2, 3), (3, 3), (4, 3)]


class TestRuns:
    """Test run counting."""

    @pytest.mark.parametrize("values,token,expected", [
        ([1, 1, 0, 1, 1, 1, 2], 1, 3),
        ([2, 2, 2, 2], 2, 4),
        ([0, 0, 0], 1, 0),
        ([], 1, 0),
    ])
    def test_longest_run(self, values, token, expected):
        assert scanner.longest_run(values, token) == expected

    def test_values_at(self):
        grid = np.zeros((6, 7), dtype=int)
        grid[5, 1] = 2
        assert scanner.values_at(grid, [(5, 0), (5, 1)]) == [0, 2]


class TestHelpers:
    """Test token and grid helpers."""

    def test_player_other(self):
        assert Player.ONE.other() == Player.TWO
        assert Player.TWO.other() == Player.ONE
        assert opponent_of(1) == 2

    def test_has_connected_four_every_axis(self):
        for cells in (
            [(5, 0), (5, 1), (5, 2), (5, 3)],
            [(2, 6), (3, 6), (4, 6), (5, 6)],
            [(2, 0), (3, 1), (4, 2), (5, 3)],
            [(5, 3), (4, 4), (3, 5), (2, 6)],
        ):
            grid = np.zeros((6, 7), dtype=int)
            for r, c in cells:
                grid[r, c] = 1
            assert has_connected_four(grid, 1)
            assert not has_connected_four(grid, 2)

    def test_has_connected_four_gap(self):
        grid = np.zeros((6, 7), dtype=int)
        grid[5, [0, 1, 2, 4]] = 1
        assert not has_connected_four(grid, 1)

    def test_parse_position(self):
        grid = parse_position(",".join(["0"] * 15 + ["1"]), 4, 4)
        assert grid.shape == (4, 4)
        assert grid[3, 3] == 1

    @pytest.mark.parametrize("text", ["0,1", ",".join(["3"] * 16)])
    def test_parse_position_rejects_bad_input(self, text):
        with pytest.raises(ValueError):
            parse_position(text, 4, 4)
