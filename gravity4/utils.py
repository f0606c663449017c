"""
utils.py - Utility functions and constants for gravity4

This module provides common constants, enumerations, and helper functions
used throughout the game implementation. Boards are numpy arrays of any
shape holding ``Player.value`` entries, with row 0 at the top.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
MIN_SIZE = 4
MAX_SIZE = 10
CONNECT_N = 4  # Number of pieces in a row to win
GRAVITY_FLIP_INTERVAL = 5  # Gravity flips every N applied moves

# Pre-filled pieces per difficulty board size; any other size gets none
PREFILL_COUNTS: Dict[Tuple[int, int], int] = {
    (6, 7): 3,
    (6, 9): 5,
    (7, 8): 7,
}


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def marker(self) -> str:
        """Wire marker used in serialized game states."""
        return _MARKERS[self]

    @classmethod
    def from_marker(cls, marker: str) -> "Player":
        for player, value in _MARKERS.items():
            if value == marker:
                return player
        raise ValueError(f"Unknown player marker: {marker!r}")

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


_MARKERS = {
    Player.EMPTY: "",
    Player.ONE: "player1",
    Player.TWO: "player2",
}


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> "GameResult":
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError("An empty cell cannot win")

    @property
    def winning_player(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @property
    def marker(self) -> str:
        if self == GameResult.DRAW:
            return "draw"
        if self == GameResult.IN_PROGRESS:
            return ""
        return self.winning_player.marker

    @classmethod
    def from_marker(cls, marker: str) -> "GameResult":
        if marker == "":
            return cls.IN_PROGRESS
        if marker == "draw":
            return cls.DRAW
        return cls.win_for(Player.from_marker(marker))


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1)
}


class Difficulty(Enum):
    """Named board presets offered when starting a game."""
    EASY = (6, 7)
    NORMAL = (6, 9)
    HARD = (7, 8)

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.value

    @property
    def prefill_count(self) -> int:
        return prefill_count(*self.value)


def prefill_count(rows: int, cols: int) -> int:
    """Number of randomly pre-filled pieces for a board of this size."""
    return PREFILL_COUNTS.get((rows, cols), 0)


def is_valid_position(board: np.ndarray, row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        board: The game board
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    rows, cols = board.shape
    return 0 <= row < rows and 0 <= col < cols


def count_direction(board: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
    """
    Count pieces matching (row, col) strictly along (dr, dc), stopping at the
    first out-of-bounds position or non-matching cell.
    """
    player_value = board[row, col]
    count = 0
    r, c = row + dr, col + dc
    while is_valid_position(board, r, c) and board[r, c] == player_value:
        count += 1
        r += dr
        c += dc
    return count


def check_win_at_position(board: np.ndarray, row: int, col: int,
                          connect_n: int = CONNECT_N) -> bool:
    """
    Check if the piece at the given position completes a line of ``connect_n``.

    Args:
        board: The game board
        row: Row index where piece was placed
        col: Column index where piece was placed
        connect_n: Line length needed to win

    Returns:
        True if the move results in a win, False otherwise
    """
    if board[row, col] == Player.EMPTY.value:
        return False

    for dr, dc in DIRECTION_VECTORS.values():
        count = (1 + count_direction(board, row, col, dr, dc)
                 + count_direction(board, row, col, -dr, -dc))
        if count >= connect_n:
            return True

    return False


def winning_line_at_position(board: np.ndarray, row: int, col: int,
                             connect_n: int = CONNECT_N) -> List[Tuple[int, int]]:
    """
    Get the positions of the line through (row, col) that reaches ``connect_n``.

    Returns:
        List of (row, col) positions ordered along the line, or empty list
    """
    if board[row, col] == Player.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        backward = count_direction(board, row, col, -dr, -dc)
        forward = count_direction(board, row, col, dr, dc)
        if backward + 1 + forward >= connect_n:
            start_r, start_c = row - dr * backward, col - dc * backward
            return [(start_r + dr * i, start_c + dc * i)
                    for i in range(backward + 1 + forward)]

    return []


def is_board_full(board: np.ndarray) -> bool:
    """True iff no cell of the board is empty."""
    return bool(np.all(board != Player.EMPTY.value))


def find_landing_row(board: np.ndarray, column: int, from_top: bool = False) -> Optional[int]:
    """
    Find the first empty cell of a column.

    Args:
        board: The game board
        column: Column index (must be in bounds)
        from_top: Scan from row 0 downward instead of from the bottom row upward

    Returns:
        Row index of the landing cell, or None if the column is full
    """
    rows = board.shape[0]
    scan = range(rows) if from_top else range(rows - 1, -1, -1)
    for row in scan:
        if board[row, column] == Player.EMPTY.value:
            return row
    return None


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        board: The game board

    Returns:
        ASCII representation of the board
    """
    cols = board.shape[1]
    result = ["|" + "-" * (cols * 2 - 1) + "|"]

    for row in board:
        result.append("|" + " ".join(str(Player(int(cell))) for cell in row) + "|")

    result.append("|" + "-" * (cols * 2 - 1) + "|")
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
