"""
Connect Four board engine.

The board is stored as a numpy integer grid where:
- 0 represents an empty cell
- a player's number (1 or 2) represents that player's piece

The hot loops (lowest open row, win scan, fullness) run as Numba-compiled
kernels over the raw grid; the Board class wraps them and keeps the mapping
from player numbers back to Player references.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from numba import jit

from connect_four.errors import InvalidMove

logger = logging.getLogger(__name__)

EMPTY = 0
CONNECT_LENGTH = 4


@dataclass(frozen=True)
class Player:
    """A player: display color plus player number (1 or 2)."""

    color: str
    num: int

    def __str__(self) -> str:
        return f"Player {self.num}"


@jit(nopython=True, cache=True)
def _jit_find_lowest_open_row(grid: np.ndarray, col: int, height: int) -> int:
    """
    JIT-compiled scan from the bottom row upward for the first empty cell.

    Returns:
        int: Row index, or -1 if the column is full
    """
    for row in range(height - 1, -1, -1):
        if grid[row, col] == 0:
            return row
    return -1


@jit(nopython=True, cache=True)
def _jit_check_for_win(grid: np.ndarray, player_value: int, connect_length: int,
                       height: int, width: int) -> bool:
    """
    JIT-compiled brute-force win scan.

    For every cell, walk the run of ``connect_length`` cells starting there in
    each of the four directions: right, down, down-right and down-left. Rows
    are bounded by ``height`` and columns by ``width``.

    Returns:
        bool: True if any run is fully owned by ``player_value``
    """
    # right, down, down-right, down-left
    row_steps = (0, 1, 1, 1)
    col_steps = (1, 0, 1, -1)

    for y in range(height):
        for x in range(width):
            for i in range(4):
                dy = row_steps[i]
                dx = col_steps[i]
                won = True
                for k in range(connect_length):
                    r = y + dy * k
                    c = x + dx * k
                    if not (0 <= r < height and 0 <= c < width and grid[r, c] == player_value):
                        won = False
                        break
                if won:
                    return True

    return False


@jit(nopython=True, cache=True)
def _jit_is_full(grid: np.ndarray, height: int, width: int) -> bool:
    for row in range(height):
        for col in range(width):
            if grid[row, col] == 0:
                return False
    return True


def check_for_win(grid: np.ndarray, player_num: int, height: int, width: int) -> bool:
    """
    Check whether ``player_num`` owns four cells in a row anywhere on ``grid``.

    Args:
        grid: Board grid of player numbers (0 = empty)
        player_num: Player number to look for
        height: Number of rows
        width: Number of columns

    Returns:
        bool: True if the player has a winning run
    """
    if player_num == EMPTY:
        return False
    return bool(_jit_check_for_win(grid, player_num, CONNECT_LENGTH, height, width))


class Board:
    """
    Fixed-size Connect Four grid.

    Cells are write-once: a placed piece is never cleared or overwritten.

    Attributes:
        height (int): Number of rows
        width (int): Number of columns
        grid (np.ndarray): The raw grid of player numbers
    """

    MAX_HEIGHT = 32
    MAX_WIDTH = 32

    def __init__(self, height: int = 6, width: int = 7):
        """
        Create an empty board.

        Raises:
            ValueError: If the dimensions are outside 1..32
        """
        if height < 1 or width < 1:
            raise ValueError("Board dimensions must be at least 1x1")
        if height > self.MAX_HEIGHT or width > self.MAX_WIDTH:
            raise ValueError(f"Board dimensions cannot exceed {self.MAX_HEIGHT}x{self.MAX_WIDTH}")

        self.height = height
        self.width = width
        self.grid = np.zeros((height, width), dtype=np.int64)
        self._players: Dict[int, Player] = {}

    def _check_column(self, col: int) -> None:
        if not 0 <= col < self.width:
            raise InvalidMove(f"Column {col} is outside the board (0..{self.width - 1})")

    def find_lowest_open_row(self, col: int) -> Optional[int]:
        """
        Find the row a piece dropped into ``col`` would land in.

        Returns:
            Optional[int]: Row index, or None if the column is full

        Raises:
            InvalidMove: If the column is out of range
        """
        self._check_column(col)
        row = _jit_find_lowest_open_row(self.grid, col, self.height)
        return None if row == -1 else int(row)

    def place_move(self, row: int, col: int, player: Player) -> None:
        """
        Mark the cell at (row, col) as occupied by ``player``.

        Raises:
            InvalidMove: If the coordinates are out of range or the cell is taken
        """
        if not 0 <= row < self.height:
            raise InvalidMove(f"Row {row} is outside the board (0..{self.height - 1})")
        self._check_column(col)
        if player.num == EMPTY:
            raise InvalidMove("Player number 0 is reserved for empty cells")
        if self.grid[row, col] != EMPTY:
            raise InvalidMove(f"Cell ({row}, {col}) is already occupied")

        self.grid[row, col] = player.num
        self._players[player.num] = player
        logger.debug("%s placed at (%d, %d)", player, row, col)

    def check_for_win(self, player: Player) -> bool:
        return check_for_win(self.grid, player.num, self.height, self.width)

    def is_full(self) -> bool:
        return bool(_jit_is_full(self.grid, self.height, self.width))

    def get(self, row: int, col: int) -> Optional[Player]:
        """Return the Player occupying (row, col), or None if empty."""
        value = int(self.grid[row, col])
        if value == EMPTY:
            return None
        return self._players[value]

    def to_list(self) -> List[List[int]]:
        """Copy of the grid as nested lists of player numbers."""
        return self.grid.tolist()

    def __str__(self) -> str:
        """Rows top to bottom, each cell its player number or '.' if empty."""
        lines = [
            " ".join("." if cell == EMPTY else str(cell) for cell in row)
            for row in self.grid.tolist()
        ]
        lines.append(" ".join(str(col % 10) for col in range(self.width)))
        return "\n".join(lines)
