"""
Connect Four game session.

A Game owns a Board and two Players, alternates turns in setup order and
tracks the InProgress -> Won/Tied state machine. Terminal states are
absorbing: once a game is won or tied, further moves raise GameAlreadyOver.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from connect_four.engine import Board, Player
from connect_four.errors import GameAlreadyOver, InvalidMove

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Enumeration for game states."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    TIED = "tied"


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a single attempted move.

    ``accepted`` is False only when the column was full; ``row`` is then None
    and the turn does not change.
    """

    accepted: bool
    row: Optional[int]
    column: int
    player: Player
    outcome: GameState
    winner: Optional[Player] = None


class Game:
    """
    One Connect Four session.

    Attributes:
        board (Board): The game board
        players (List[Player]): The two players, in turn order
        current_player (Player): The player to move
        state (GameState): Current state of the game
    """

    def __init__(self, players: Sequence[Player], height: int = 6, width: int = 7):
        """
        Start a new game with an empty board; ``players[0]`` moves first.

        Raises:
            ValueError: If there are not exactly two players numbered 1 and 2,
                or the board dimensions are invalid
        """
        if len(players) != 2:
            raise ValueError("A game needs exactly two players")
        if sorted(p.num for p in players) != [1, 2]:
            raise ValueError("Players must be numbered 1 and 2")

        self.board = Board(height, width)
        self.players: List[Player] = list(players)
        self.current_player = self.players[0]
        self.state = GameState.IN_PROGRESS
        self._winner: Optional[Player] = None
        logger.debug("New %dx%d game: %s vs %s", height, width, *self.players)

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def width(self) -> int:
        return self.board.width

    def is_over(self) -> bool:
        return self.state != GameState.IN_PROGRESS

    def winner(self) -> Optional[Player]:
        """The winning player, or None for ongoing and tied games."""
        return self._winner

    def end_message(self) -> Optional[str]:
        """Announcement for a finished game, or None while it is in progress."""
        if self.state == GameState.WON:
            return f"Player {self._winner.num} won!"
        if self.state == GameState.TIED:
            return "Tie!"
        return None

    def _game_over_message(self) -> str:
        if self._winner is not None:
            middle = f"Player {self._winner.num} won."
        else:
            middle = "It ended in a draw."
        return f"The game is over! {middle} Click New Game to start a new game."

    def attempt_move(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into ``column``.

        Args:
            column (int): Column index (0-based)

        Returns:
            MoveResult: accepted=False if the column is full, otherwise the
            placed row and the resulting game state

        Raises:
            GameAlreadyOver: If the game has already been won or tied
            InvalidMove: If the column is outside the board
        """
        if self.is_over():
            logger.info("Move in column %s rejected: game is over", column)
            raise GameAlreadyOver(self._game_over_message())
        if not 0 <= column < self.width:
            raise InvalidMove(f"Column {column} is outside the board (0..{self.width - 1})")

        player = self.current_player
        row = self.board.find_lowest_open_row(column)
        if row is None:
            logger.debug("Column %d is full; ignoring move by %s", column, player)
            return MoveResult(False, None, column, player, self.state)

        self.board.place_move(row, column, player)

        if self.board.check_for_win(player):
            self.state = GameState.WON
            self._winner = player
            logger.info("%s wins with a piece at (%d, %d)", player, row, column)
        elif self.board.is_full():
            self.state = GameState.TIED
            logger.info("Game ends in a tie")
        else:
            self._switch_player()

        return MoveResult(True, row, column, player, self.state, self._winner)

    def _switch_player(self) -> None:
        index = self.players.index(self.current_player)
        self.current_player = self.players[(index + 1) % len(self.players)]
