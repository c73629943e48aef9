"""
Connect Four Game Package

Two-player Connect Four: a board engine, a game session and a Flask web front end.
"""

from .engine import Board, Player, check_for_win
from .errors import ConnectFourError, GameAlreadyOver, InvalidMove
from .game import Game, GameState, MoveResult

__all__ = [
    'Board', 'Player', 'check_for_win',
    'ConnectFourError', 'GameAlreadyOver', 'InvalidMove',
    'Game', 'GameState', 'MoveResult',
]
__version__ = '1.0.0'
