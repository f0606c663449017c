"""
cli.py - Command-line interface for gravity4

This module provides a CLI for playing a local two-player game in the
terminal and for benchmarking the engine with random self-play.
"""

import argparse
import sys
from typing import Callable, List, Optional

from gravity4.debug import COMPONENTS, DebugLevel, debug
from gravity4.errors import GameError
from gravity4.game.manager import GameManager, validate_settings
from gravity4.game.random_source import make_random_source
from gravity4.game.rules import GameEngine
from gravity4.utils import DEFAULT_COLS, DEFAULT_ROWS, Difficulty, GameResult

QUIT = "q"
RESTART = "r"
HELP = "h"


class SimpleCLI:
    """
    Simple command-line interface for gravity4.

    Args:
        input_func: Callable used to read a line of user input
        output_func: Callable used to print a line of output
    """

    def __init__(self, input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        self.input = input_func
        self.output = output_func
        self.manager: Optional[GameManager] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog="gravity4",
                                         description="Connect Four with flipping gravity")
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')
        parser.add_argument('--components', nargs='+', choices=COMPONENTS, default=None,
                            help='Only log these components')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        # Play command
        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--difficulty', choices=[d.name.lower() for d in Difficulty],
                                 help='Board preset (overrides --rows/--cols)')
        play_parser.add_argument('--rows', type=int, default=DEFAULT_ROWS, help='Number of rows')
        play_parser.add_argument('--cols', type=int, default=DEFAULT_COLS, help='Number of columns')
        play_parser.add_argument('--player1', default='Player 1', help='Name of the first player')
        play_parser.add_argument('--player2', default='Player 2', help='Name of the second player')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the pre-filled pieces')
        play_parser.add_argument('--classic', action='store_true',
                                 help='No pre-filled pieces and no gravity flips')
        play_parser.add_argument('--json', action='store_true',
                                 help='Print the final game state as JSON')

        # Benchmark command
        benchmark_parser = subparsers.add_parser('benchmark',
                                                 help='Play random games and time the engine')
        benchmark_parser.add_argument('--games', type=int, default=1000,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--rows', type=int, default=DEFAULT_ROWS)
        benchmark_parser.add_argument('--cols', type=int, default=DEFAULT_COLS)
        benchmark_parser.add_argument('--seed', type=int, default=None)

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug_level:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)
        if self.args.components:
            debug.configure(components=self.args.components)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments and return an exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        self.output("Please specify a command. Use --help for options.")
        return 1

    def _dimensions(self):
        if self.args.difficulty:
            return Difficulty[self.args.difficulty.upper()].dimensions
        return self.args.rows, self.args.cols

    def start_game(self) -> bool:
        """Create a new game from the parsed arguments; False if they are rejected."""
        rows, cols = self._dimensions()
        try:
            self.manager.new_game(rows, cols, self.args.player1, self.args.player2,
                                  random_source=make_random_source(self.args.seed))
        except GameError as e:
            self.output(f"Cannot start game: {e}")
            return False
        return True

    def show(self) -> None:
        game = self.manager.game
        self.output(game.render())
        gravity = "UP (inverted)" if game.gravity_inverted else "DOWN"
        self.output(f"Turn {game.turn_count} - gravity {gravity}")
        self.output(game.status_message())

    def play_game(self) -> int:
        """Play a game interactively."""
        self.manager = GameManager(prefill=not self.args.classic,
                                   gravity_flip=not self.args.classic)
        if not self.start_game():
            return 2

        self.output("Starting a new game!")
        self.output(f"Enter a column number to drop a piece, "
                    f"'{QUIT}' to quit, '{RESTART}' to restart.")
        self.show()

        while not self.manager.game.game_over:
            command = self.get_command()
            if command is None:
                continue
            if command == QUIT:
                self.output("Quitting game.")
                return 0
            if command == RESTART:
                self.start_game()
                self.output("Game restarted.")
                self.show()
                continue
            if command == HELP:
                self.output(f"Columns 0-{self.manager.game.cols - 1}, "
                            f"'{QUIT}' quit, '{RESTART}' restart")
                continue

            try:
                self.manager.drop_piece(command)
            except GameError as e:
                self.output(str(e))
                continue
            self.show()

        line = self.manager.game.get_winning_line()
        if line:
            self.output("Winning line: " + " ".join(f"({r},{c})" for r, c in line))
        if self.args.json:
            self.output(self.manager.game.get_state().to_json())
        return 0

    def get_command(self):
        """
        Read one command from the user.

        Returns:
            Column index, a command letter, or None if the input was not understood
        """
        try:
            user_input = self.input("Your move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESTART, HELP):
            return user_input

        try:
            return int(user_input)
        except ValueError:
            self.output("Invalid input. Please enter a column number or a command.")
            return None

    def benchmark(self) -> int:
        """Play random games to completion and report timing and outcomes."""
        try:
            validate_settings(self.args.rows, self.args.cols, "A", "B")
        except GameError as e:
            self.output(f"Cannot run benchmark: {e}")
            return 2

        rng = make_random_source(self.args.seed)
        results = {result: 0 for result in GameResult if result.is_game_over()}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(self.args.games):
            game = GameEngine.create(self.args.rows, self.args.cols, "A", "B", random_source=rng)
            while not game.game_over:
                moves = game.get_valid_moves()
                game.drop_piece(moves[rng.integers(0, len(moves))])
            results[game.game_result] += 1
            total_moves += game.turn_count
        elapsed = debug.end_timer("benchmark", "cli")

        games = max(self.args.games, 1)
        self.output(f"Played {self.args.games} games in {elapsed:.3f}s "
                    f"({elapsed / games * 1000:.3f} ms/game)")
        self.output(f"Average length: {total_moves / games:.1f} moves")
        for result, count in results.items():
            self.output(f"  {result.name}: {count}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
