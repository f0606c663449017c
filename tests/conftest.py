"""
Shared fixtures for gravity4 tests.
"""
import pytest

from gravity4.game.board import Board
from gravity4.game.rules import GameEngine
from gravity4.utils import Player


class SequenceRandomSource:
    """RandomSource that replays a fixed list of integers."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def integers(self, low, high):
        if not self.values:
            raise AssertionError("SequenceRandomSource ran out of values")
        value = self.values.pop(0)
        assert low <= value < high, f"{value} not in [{low}, {high})"
        self.calls.append((low, high))
        return value

    @property
    def exhausted(self):
        return not self.values


def board_from_rows(rows):
    """
    Build a Board from strings, top row first.

    'X' is player one, 'O' is player two and '.' is empty.
    """
    symbols = {'.': Player.EMPTY, 'X': Player.ONE, 'O': Player.TWO}
    board = Board(len(rows), len(rows[0]))
    for r, line in enumerate(rows):
        for c, symbol in enumerate(line):
            if symbols[symbol] != Player.EMPTY:
                board.place(r, c, symbols[symbol])
    return board


@pytest.fixture
def sequence_source():
    return SequenceRandomSource


@pytest.fixture
def plain_game():
    """6x8 game: not a difficulty preset, so no pieces are pre-filled."""
    return GameEngine.create(6, 8, "Alice", "Bob")


@pytest.fixture
def classic_game():
    """6x7 game with no pre-fill and fixed gravity."""
    return GameEngine.classic("Alice", "Bob")
