"""Exceptions raised by the Connect Four engine and game session."""


class ConnectFourError(Exception):
    """Base class for Connect Four errors."""


class InvalidMove(ConnectFourError):
    """A move targeted an occupied cell or a position outside the board."""


class GameAlreadyOver(ConnectFourError):
    """A move was attempted after the game reached a win or a tie."""
