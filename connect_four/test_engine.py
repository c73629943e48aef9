"""
Test suite for the Connect Four board engine.

Covers column drops, write-once cells, win detection in every direction,
non-square board bounds and full-board detection.
"""

import numpy as np
import pytest

from connect_four.engine import Board, Player, check_for_win
from connect_four.errors import InvalidMove

RED = Player("#ff0000", 1)
BLUE = Player("#0000ff", 2)


def place_all(board, cells, player):
    for row, col in cells:
        board.place_move(row, col, player)


def draw_pattern(row, col):
    """Fill pattern with no four-in-a-row: pairs of columns alternate per row."""
    return RED if ((col // 2) + row) % 2 == 0 else BLUE


class TestBoardInitialization:
    """Test Board construction."""

    def test_default_dimensions(self):
        board = Board()
        assert board.height == 6
        assert board.width == 7
        assert board.grid.shape == (6, 7)
        assert not board.grid.any()

    def test_invalid_dimensions(self):
        """Test that out-of-range dimensions are rejected."""
        with pytest.raises(ValueError):
            Board(0, 7)
        with pytest.raises(ValueError):
            Board(6, 0)
        with pytest.raises(ValueError):
            Board(33, 7)
        with pytest.raises(ValueError):
            Board(6, 33)


class TestFindLowestOpenRow:
    """Test the column drop scan."""

    @pytest.mark.parametrize("height,width", [(6, 7), (4, 4), (1, 1), (10, 3)])
    def test_empty_column_returns_bottom_row(self, height, width):
        board = Board(height, width)
        assert board.find_lowest_open_row(0) == height - 1
        assert board.find_lowest_open_row(width - 1) == height - 1

    def test_column_fills_up(self):
        """Test that each drop lands one row higher until the column is full."""
        board = Board(6, 7)
        for expected in range(5, -1, -1):
            row = board.find_lowest_open_row(3)
            assert row == expected
            board.place_move(row, 3, RED if expected % 2 else BLUE)

        assert board.find_lowest_open_row(3) is None
        assert board.find_lowest_open_row(2) == 5

    def test_out_of_range_column(self):
        board = Board(6, 7)
        with pytest.raises(InvalidMove):
            board.find_lowest_open_row(-1)
        with pytest.raises(InvalidMove):
            board.find_lowest_open_row(7)


class TestPlaceMove:
    """Test that cells are written exactly once."""

    def test_place_sets_cell(self):
        board = Board(6, 7)
        board.place_move(5, 2, RED)
        assert board.get(5, 2) is RED
        assert board.get(5, 3) is None
        assert board.to_list()[5][2] == 1

    def test_player_number_zero_is_rejected(self):
        board = Board(6, 7)
        with pytest.raises(InvalidMove):
            board.place_move(5, 0, Player("#00ff00", 0))
        assert not board.grid.any()

    def test_occupied_cell_is_never_overwritten(self):
        board = Board(6, 7)
        board.place_move(5, 0, RED)

        with pytest.raises(InvalidMove):
            board.place_move(5, 0, BLUE)
        with pytest.raises(InvalidMove):
            board.place_move(5, 0, RED)

        assert board.get(5, 0) is RED

    def test_out_of_range_coordinates(self):
        board = Board(6, 7)
        with pytest.raises(InvalidMove):
            board.place_move(6, 0, RED)
        with pytest.raises(InvalidMove):
            board.place_move(-1, 0, RED)
        with pytest.raises(InvalidMove):
            board.place_move(0, 7, RED)
        assert not board.grid.any()

    def test_to_list_returns_copy(self):
        board = Board(2, 2)
        board_list = board.to_list()
        board_list[0][0] = 999
        assert board.to_list()[0][0] == 0


class TestCheckForWin:
    """Test win detection in all directions."""

    def test_horizontal_win(self):
        board = Board(6, 7)
        place_all(board, [(0, 0), (0, 1), (0, 2), (0, 3)], RED)
        assert board.check_for_win(RED) is True
        assert board.check_for_win(BLUE) is False

    def test_vertical_win(self):
        board = Board(6, 7)
        place_all(board, [(2, 4), (3, 4), (4, 4), (5, 4)], BLUE)
        assert board.check_for_win(BLUE) is True
        assert board.check_for_win(RED) is False

    def test_diagonal_down_right_win(self):
        board = Board(6, 7)
        place_all(board, [(1, 1), (2, 2), (3, 3), (4, 4)], RED)
        assert board.check_for_win(RED) is True

    def test_diagonal_down_left_win(self):
        board = Board(6, 7)
        place_all(board, [(2, 6), (3, 5), (4, 4), (5, 3)], RED)
        assert board.check_for_win(RED) is True

    def test_three_in_a_row_is_not_a_win(self):
        board = Board(6, 7)
        place_all(board, [(5, 0), (5, 1), (5, 2)], RED)
        place_all(board, [(5, 6), (4, 6), (3, 6)], RED)
        place_all(board, [(3, 3), (2, 4), (1, 5)], RED)
        assert board.check_for_win(RED) is False

    def test_broken_run_is_not_a_win(self):
        board = Board(6, 7)
        place_all(board, [(5, 0), (5, 1), (5, 3), (5, 4)], RED)
        board.place_move(5, 2, BLUE)
        assert board.check_for_win(RED) is False
        assert board.check_for_win(BLUE) is False

    def test_empty_board(self):
        board = Board(6, 7)
        assert board.check_for_win(RED) is False
        assert board.check_for_win(BLUE) is False

    def test_free_function_on_raw_grid(self):
        grid = np.zeros((6, 7), dtype=np.int64)
        grid[5, 3:7] = 2
        assert check_for_win(grid, 2, 6, 7) is True
        assert check_for_win(grid, 1, 6, 7) is False
        assert check_for_win(grid, 0, 6, 7) is False


class TestNonSquareBoards:
    """Test that rows are bounded by height and columns by width."""

    def test_wide_board_horizontal_win_past_height(self):
        board = Board(3, 8)
        place_all(board, [(0, 4), (0, 5), (0, 6), (0, 7)], RED)
        assert board.check_for_win(RED) is True

    def test_wide_board_down_left_diagonal_past_height(self):
        board = Board(4, 8)
        place_all(board, [(0, 7), (1, 6), (2, 5), (3, 4)], BLUE)
        assert board.check_for_win(BLUE) is True

    def test_narrow_board_has_no_horizontal_win(self):
        board = Board(8, 3)
        for row in range(8):
            place_all(board, [(row, 0), (row, 1), (row, 2)], RED if row % 2 else BLUE)
        assert board.check_for_win(RED) is False
        assert board.check_for_win(BLUE) is False

    def test_tall_board_vertical_win(self):
        board = Board(8, 3)
        place_all(board, [(4, 2), (5, 2), (6, 2), (7, 2)], RED)
        assert board.check_for_win(RED) is True


class TestIsFull:
    """Test full-board detection."""

    def test_empty_board_is_not_full(self):
        assert Board(6, 7).is_full() is False

    def test_full_board_without_winner(self):
        board = Board(6, 7)
        for row in range(6):
            for col in range(7):
                board.place_move(row, col, draw_pattern(row, col))

        assert board.is_full() is True
        assert board.check_for_win(RED) is False
        assert board.check_for_win(BLUE) is False

    def test_one_empty_cell_is_not_full(self):
        board = Board(6, 7)
        for row in range(6):
            for col in range(7):
                if (row, col) != (0, 6):
                    board.place_move(row, col, draw_pattern(row, col))

        assert board.is_full() is False


class TestBoardRepresentation:
    """Test board display."""

    def test_string_representation(self):
        board = Board(2, 3)
        board.place_move(1, 0, RED)
        board.place_move(1, 1, BLUE)

        assert str(board).splitlines() == [
            ". . .",
            "1 2 .",
            "0 1 2",
        ]

    def test_player_str(self):
        assert str(RED) == "Player 1"
