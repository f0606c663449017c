"""
gravity4 - Connect Four with random starting pieces and flipping gravity

This package provides the board-state engine for a two-player connection
game: move legality, gravity-aware landing, win and draw detection, turn
alternation, plus the pre-fill and gravity inversion variants. A small
session manager and a terminal interface sit on top of it.
"""

# Version number
__version__ = '0.1.0'
