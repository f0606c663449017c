"""
gravity4.interfaces - User interfaces for gravity4

This package contains the command-line interface for playing a local
two-player game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
