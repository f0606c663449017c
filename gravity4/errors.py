"""
errors.py - Exceptions raised by the game engine and session manager

Every failure here is local and recoverable: the engine leaves its state
untouched and the caller decides how to report it.
"""


class GameError(ValueError):
    """Base class for all gravity4 errors."""


class MoveError(GameError):
    """Raised when a piece cannot be dropped."""


class GameOverError(MoveError):
    """Raised when a move is attempted after the game has ended."""

    def __init__(self, message: str = "The game is over"):
        super().__init__(message)


class InvalidColumnError(MoveError):
    """Raised when the column index is outside the board."""

    def __init__(self, column, cols: int):
        self.column = column
        self.cols = cols
        super().__init__(f"Invalid column: {column} (must be between 0 and {cols - 1})")


class ColumnFullError(MoveError):
    """Raised when no empty cell is reachable in the column under current gravity."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class SessionError(GameError):
    """Raised by the session manager."""


class NoActiveGameError(SessionError):
    def __init__(self, message: str = "No game in progress"):
        super().__init__(message)


class InvalidSettingsError(SessionError):
    """Raised when a new game request has bad dimensions or player names."""
