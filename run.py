#!/usr/bin/env python3
"""
run.py - Main entry point for gravity4

Examples:
    python run.py play --difficulty normal --player1 Alice --player2 Bob
    python run.py play --classic
    python run.py benchmark --games 500 --seed 7
"""

import sys

from gravity4.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
