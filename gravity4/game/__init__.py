"""
gravity4.game - Core game mechanics for gravity4

This package contains the board representation, gravity handling,
the game engine and the single-game session manager.
"""

from gravity4.game.board import Board, initialize_board
from gravity4.game.gravity import Gravity, GravityController
from gravity4.game.manager import GameManager, validate_settings
from gravity4.game.random_source import NumpyRandomSource, RandomSource, make_random_source
from gravity4.game.rules import GameEngine, GameState

__all__ = [
    'Board',
    'initialize_board',
    'Gravity',
    'GravityController',
    'GameManager',
    'validate_settings',
    'NumpyRandomSource',
    'RandomSource',
    'make_random_source',
    'GameEngine',
    'GameState',
]
