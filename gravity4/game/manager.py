"""
manager.py - Single active game session

GameManager is the boundary a transport layer talks to: it validates new
game requests, keeps at most one active GameEngine, serializes access to it
and hands back JSON-compatible state dictionaries.
"""

import threading
from typing import Any, Dict, Optional

from gravity4.debug import debug
from gravity4.errors import InvalidSettingsError, NoActiveGameError
from gravity4.game.random_source import RandomSource
from gravity4.game.rules import GameEngine
from gravity4.utils import MAX_SIZE, MIN_SIZE


def validate_settings(rows: int, cols: int, player1: str, player2: str) -> None:
    """
    Check a new game request.

    Raises:
        InvalidSettingsError: Dimensions outside [MIN_SIZE, MAX_SIZE] or an empty name
    """
    if not isinstance(rows, int) or not MIN_SIZE <= rows <= MAX_SIZE:
        raise InvalidSettingsError(f"Rows must be between {MIN_SIZE} and {MAX_SIZE}")
    if not isinstance(cols, int) or not MIN_SIZE <= cols <= MAX_SIZE:
        raise InvalidSettingsError(f"Columns must be between {MIN_SIZE} and {MAX_SIZE}")
    if not player1 or not player2:
        raise InvalidSettingsError("Both player names are required")


class GameManager:
    """
    Holds the one game currently being played.

    Args:
        prefill: Pre-fill difficulty-preset boards in new games
        gravity_flip: Enable gravity inversion in new games
    """

    def __init__(self, prefill: bool = True, gravity_flip: bool = True):
        self.prefill = prefill
        self.gravity_flip = gravity_flip
        self._game: Optional[GameEngine] = None
        self._lock = threading.Lock()

    @property
    def has_game(self) -> bool:
        return self._game is not None

    @property
    def game(self) -> GameEngine:
        """The active engine, for read-only callers such as renderers."""
        if self._game is None:
            raise NoActiveGameError()
        return self._game

    def new_game(self, rows: int, cols: int, player1: str, player2: str,
                 random_source: Optional[RandomSource] = None) -> Dict[str, Any]:
        """Validate the request, replace any current game and return its initial state."""
        validate_settings(rows, cols, player1, player2)
        game = GameEngine.create(rows, cols, player1, player2, random_source=random_source,
                                 prefill=self.prefill, gravity_flip=self.gravity_flip)
        with self._lock:
            if self._game is not None:
                debug.debug("Replacing game in progress", "manager")
            self._game = game
            return game.get_state().to_dict()

    def drop_piece(self, column: int) -> Dict[str, Any]:
        """Play a move in the active game and return the new state."""
        with self._lock:
            if self._game is None:
                raise NoActiveGameError()
            return self._game.drop_piece(column).to_dict()

    def get_state(self) -> Dict[str, Any]:
        with self._lock:
            if self._game is None:
                raise NoActiveGameError()
            return self._game.get_state().to_dict()

    def reset(self) -> None:
        """Discard the active game, if any."""
        with self._lock:
            if self._game is not None:
                debug.debug("Game discarded", "manager")
            self._game = None
