"""
gravity.py - Gravity direction tracking

Pieces normally settle at the bottom of a column. Every ``interval`` applied
moves the direction flips, after which pieces settle at the top instead.
"""

from enum import Enum

from gravity4.debug import debug
from gravity4.utils import GRAVITY_FLIP_INTERVAL


class Gravity(Enum):
    """Direction in which a dropped piece travels."""
    DOWN = "down"
    UP = "up"


class GravityController:
    """
    Tracks whether gravity is currently inverted.

    Args:
        enabled: When False gravity never flips (classic rules)
        interval: Number of applied moves between flips
    """

    def __init__(self, enabled: bool = True, interval: int = GRAVITY_FLIP_INTERVAL):
        if interval <= 0:
            raise ValueError(f"Gravity flip interval must be positive, got {interval}")
        self.enabled = enabled
        self.interval = interval
        self.inverted = False

    def landing_direction(self) -> Gravity:
        return Gravity.UP if self.inverted else Gravity.DOWN

    def on_move_applied(self, turn_count: int) -> bool:
        """
        Flip gravity if ``turn_count`` is a positive multiple of the interval.

        Must be called once per successful move, after the turn counter has
        been incremented and before the win/draw checks.

        Returns:
            True if gravity flipped on this move
        """
        if not self.enabled or turn_count <= 0 or turn_count % self.interval != 0:
            return False

        self.inverted = not self.inverted
        debug.debug(f"Gravity flipped on turn {turn_count}, now {self.landing_direction().value}",
                    "gravity")
        return True
