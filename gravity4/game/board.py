"""
board.py - Board representation and core mechanics for gravity4

This module implements the Board class which holds the grid of pieces and
provides landing-cell search, piece placement, win and full-board checks.
It also implements board initialization, including the random pre-fill
that seeds the difficulty presets with pieces before the first move.
"""

import numbers
from typing import List, Optional, Tuple

import numpy as np

from gravity4.debug import debug
from gravity4.game.gravity import Gravity
from gravity4.game.random_source import RandomSource
from gravity4.utils import (CONNECT_N, Player, check_win_at_position, find_landing_row,
                            is_board_full, prefill_count, render_board_ascii,
                            winning_line_at_position)


def initialize_board(rows: int, cols: int, random_source: Optional[RandomSource] = None,
                     prefill: bool = True) -> np.ndarray:
    """
    Build an empty rows x cols grid and seed it with pre-filled pieces.

    The number of pieces comes from the difficulty lookup (see
    ``prefill_count``). Each piece goes to a random column, landing with
    normal gravity, and belongs to a random player. Full columns are retried.

    Args:
        rows: Number of rows
        cols: Number of columns
        random_source: Source of random integers; required when pieces are placed
        prefill: Whether to place pre-filled pieces at all

    Returns:
        2D numpy array of ``Player`` values
    """
    grid = np.full((rows, cols), Player.EMPTY.value, dtype=np.int8)

    count = prefill_count(rows, cols) if prefill else 0
    if count == 0:
        return grid

    if random_source is None:
        raise ValueError("A random source is required to pre-fill the board")

    capacity = rows * cols
    if count > capacity:
        debug.warning(f"Pre-fill count {count} exceeds capacity {capacity}, clamping", "board")
        count = capacity

    players = (Player.ONE, Player.TWO)
    placed = 0
    while placed < count:
        col = random_source.integers(0, cols)
        row = find_landing_row(grid, col)
        if row is None:
            continue

        player = players[random_source.integers(0, 2)]
        grid[row, col] = player.value
        placed += 1
        debug.trace(f"Pre-filled ({row}, {col}) with {player.name}", "board")

    debug.debug(f"Pre-filled {placed} pieces on {rows}x{cols} board", "board")
    return grid


class Board:
    """
    Represents a game board of any size.

    The grid is a numpy ``int8`` array of ``Player`` values where row 0 is the
    top of the board. Pieces are only ever added, never removed.
    """

    def __init__(self, rows: int, cols: int, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.full((rows, cols), Player.EMPTY.value, dtype=np.int8)
        elif grid.shape != (rows, cols):
            raise ValueError(f"Grid shape {grid.shape} does not match {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.grid = grid

    @classmethod
    def create(cls, rows: int, cols: int, random_source: Optional[RandomSource] = None,
               prefill: bool = True) -> 'Board':
        """Create a board, pre-filled according to its dimensions."""
        return cls(rows, cols, initialize_board(rows, cols, random_source, prefill))

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        return Board(self.rows, self.cols, self.grid.copy())

    def in_bounds(self, column: int) -> bool:
        # bool is an Integral subclass but never a column
        if isinstance(column, bool) or not isinstance(column, numbers.Integral):
            return False
        return 0 <= column < self.cols

    def cell(self, row: int, col: int) -> Player:
        return Player(int(self.grid[row, col]))

    def landing_row(self, column: int, gravity: Gravity = Gravity.DOWN) -> Optional[int]:
        """
        Find where a piece dropped in ``column`` would land.

        Args:
            column: Column index (must be in bounds)
            gravity: Direction the piece travels

        Returns:
            Row index, or None if the column has no empty cell
        """
        return find_landing_row(self.grid, column, from_top=gravity == Gravity.UP)

    def is_column_full(self, column: int) -> bool:
        return find_landing_row(self.grid, column) is None

    def place(self, row: int, col: int, player: Player) -> None:
        """Write a player's piece into an empty cell."""
        if player == Player.EMPTY:
            raise ValueError("Cannot place an empty piece")
        if self.grid[row, col] != Player.EMPTY.value:
            raise ValueError(f"Cell ({row}, {col}) is already occupied")
        self.grid[row, col] = player.value

    def is_winning_move(self, row: int, col: int) -> bool:
        """Check if the piece at (row, col) completes a line of four."""
        return check_win_at_position(self.grid, row, col, CONNECT_N)

    def get_winning_line(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line through (row, col).

        Returns:
            List of (row, col) positions forming the line, or empty list if no win
        """
        return winning_line_at_position(self.grid, row, col, CONNECT_N)

    def is_full(self) -> bool:
        return is_board_full(self.grid)

    def count_pieces(self) -> int:
        return int(np.count_nonzero(self.grid != Player.EMPTY.value))

    def to_markers(self) -> List[List[str]]:
        """Row-major grid of wire markers."""
        return [[Player(int(cell)).marker for cell in row] for row in self.grid]

    @classmethod
    def from_markers(cls, markers: List[List[str]]) -> 'Board':
        values = [[Player.from_marker(cell).value for cell in row] for row in markers]
        grid = np.array(values, dtype=np.int8)
        if grid.ndim != 2:
            raise ValueError("Board markers must form a rectangular grid")
        rows, cols = grid.shape
        return cls(rows, cols, grid)

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
