"""
rules.py - Game state management for gravity4

This module provides:
1. GameState, an immutable snapshot of a game with its wire serialization
2. GameEngine, which applies moves, alternates turns, flips gravity and
   detects wins and draws
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from gravity4.debug import debug
from gravity4.errors import ColumnFullError, GameOverError, InvalidColumnError
from gravity4.game.board import Board
from gravity4.game.gravity import GravityController
from gravity4.game.random_source import RandomSource, make_random_source
from gravity4.utils import GRAVITY_FLIP_INTERVAL, GameResult, Player


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of a game."""
    rows: int
    cols: int
    board: Tuple[Tuple[Player, ...], ...]
    current_player: Player  # Player.EMPTY once the game is over
    player1: str
    player2: str
    game_over: bool
    winner: GameResult
    last_move: Optional[Tuple[int, int]]
    turn_count: int
    inverse_gravity: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON-compatible shape expected by clients."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "board": [[cell.marker for cell in row] for row in self.board],
            "currentPlayer": self.current_player.marker,
            "player1": self.player1,
            "player2": self.player2,
            "gameOver": self.game_over,
            "winner": self.winner.marker,
            "lastMove": (None if self.last_move is None
                         else {"row": self.last_move[0], "col": self.last_move[1]}),
            "turnCount": self.turn_count,
            "inverseGravity": self.inverse_gravity,
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        """
        Rebuild a snapshot from its ``to_dict`` form.

        Raises:
            ValueError: Unknown markers, or a board that is not rows x cols
        """
        rows = int(data["rows"])
        cols = int(data["cols"])
        board = tuple(tuple(Player.from_marker(cell) for cell in row) for row in data["board"])
        if len(board) != rows or any(len(row) != cols for row in board):
            raise ValueError(f"Board does not match {rows}x{cols} dimensions")

        last_move = data.get("lastMove")
        return cls(
            rows=rows,
            cols=cols,
            board=board,
            current_player=Player.from_marker(data["currentPlayer"]),
            player1=data["player1"],
            player2=data["player2"],
            game_over=bool(data["gameOver"]),
            winner=GameResult.from_marker(data["winner"]),
            last_move=None if last_move is None else (int(last_move["row"]), int(last_move["col"])),
            turn_count=int(data["turnCount"]),
            inverse_gravity=bool(data["inverseGravity"]),
        )

    def count_pieces(self) -> int:
        return sum(1 for row in self.board for cell in row if cell != Player.EMPTY)


class GameEngine:
    """
    Runs a single game between two named players.

    The engine is synchronous and performs no locking; callers sharing one
    engine between threads must serialize access themselves.

    Args:
        board: Starting board (possibly pre-filled)
        player1_name: Display name of the first player
        player2_name: Display name of the second player
        gravity: Gravity controller; defaults to one flipping every 5 moves
    """

    def __init__(self, board: Board, player1_name: str, player2_name: str,
                 gravity: Optional[GravityController] = None):
        self.board = board
        self.player1_name = player1_name
        self.player2_name = player2_name
        self.gravity = gravity if gravity is not None else GravityController()
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Tuple[int, int]] = None
        self.turn_count = 0

    @classmethod
    def create(cls, rows: int, cols: int, player1_name: str, player2_name: str,
               random_source: Optional[RandomSource] = None,
               prefill: bool = True, gravity_flip: bool = True,
               flip_interval: int = GRAVITY_FLIP_INTERVAL) -> 'GameEngine':
        """
        Create a new game.

        Dimensions and names are assumed to be validated by the caller.

        Args:
            rows: Number of rows
            cols: Number of columns
            player1_name: Display name of the first player, who moves first
            player2_name: Display name of the second player
            random_source: Source for pre-fill randomness; a fresh unseeded one if None
            prefill: Seed difficulty-preset boards with random pieces
            gravity_flip: Enable periodic gravity inversion
            flip_interval: Moves between gravity flips

        Returns:
            A new GameEngine ready for the first move
        """
        if random_source is None and prefill:
            random_source = make_random_source()

        board = Board.create(rows, cols, random_source, prefill=prefill)
        engine = cls(board, player1_name, player2_name,
                     GravityController(enabled=gravity_flip, interval=flip_interval))
        debug.info(f"New {rows}x{cols} game: {player1_name} vs {player2_name} "
                   f"({board.count_pieces()} pre-filled)", "game")
        return engine

    @classmethod
    def classic(cls, player1_name: str, player2_name: str) -> 'GameEngine':
        """Plain 6x7 game with no pre-fill and fixed gravity."""
        return cls.create(6, 7, player1_name, player2_name, prefill=False, gravity_flip=False)

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def game_over(self) -> bool:
        return self.game_result.is_game_over()

    @property
    def gravity_inverted(self) -> bool:
        return self.gravity.inverted

    @property
    def winner(self) -> Optional[Player]:
        return self.game_result.winning_player

    def player_name(self, player: Player) -> str:
        if player == Player.ONE:
            return self.player1_name
        if player == Player.TWO:
            return self.player2_name
        raise ValueError("Empty cells have no player name")

    def is_valid_move(self, column: int) -> bool:
        """Check if dropping in ``column`` would succeed."""
        if self.game_over or not self.board.in_bounds(column):
            return False
        return self.board.landing_row(column, self.gravity.landing_direction()) is not None

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of valid columns where a piece can be placed.

        Returns:
            List of valid column indices
        """
        if self.game_over:
            return []
        return [col for col in range(self.cols) if not self.board.is_column_full(col)]

    def drop_piece(self, column: int) -> GameState:
        """
        Drop the current player's piece into a column.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The game state after the move

        Raises:
            GameOverError: The game has already ended
            InvalidColumnError: ``column`` is not an integer index inside the board
            ColumnFullError: The column has no empty cell in the current gravity direction
        """
        if self.game_over:
            debug.debug(f"Rejected move in column {column}: game is over", "game")
            raise GameOverError()

        if not self.board.in_bounds(column):
            debug.debug(f"Rejected move in column {column}: out of bounds", "game")
            raise InvalidColumnError(column, self.cols)
        column = int(column)

        row = self.board.landing_row(column, self.gravity.landing_direction())
        if row is None:
            debug.debug(f"Rejected move in column {column}: column full", "game")
            raise ColumnFullError(column)

        player = self.current_player
        self.board.place(row, column, player)
        self.last_move = (row, column)
        self.turn_count += 1
        debug.debug(f"Turn {self.turn_count}: {player.name} placed at ({row}, {column})", "game")

        # Flip before the win check so a game-ending move still records it
        self.gravity.on_move_applied(self.turn_count)

        if self.board.is_winning_move(row, column):
            self.game_result = GameResult.win_for(player)
            debug.info(f"{self.player_name(player)} wins on turn {self.turn_count}", "game")
        elif self.board.is_full():
            self.game_result = GameResult.DRAW
            debug.info(f"Game ends in a draw after {self.turn_count} turns", "game")
        else:
            self.current_player = player.other()

        return self.get_state()

    def get_state(self) -> GameState:
        """Snapshot the current game without modifying it."""
        return GameState(
            rows=self.rows,
            cols=self.cols,
            board=tuple(tuple(Player(int(cell)) for cell in row) for row in self.board.grid),
            current_player=Player.EMPTY if self.game_over else self.current_player,
            player1=self.player1_name,
            player2=self.player2_name,
            game_over=self.game_over,
            winner=self.game_result,
            last_move=self.last_move,
            turn_count=self.turn_count,
            inverse_gravity=self.gravity.inverted,
        )

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions forming the winning line, or empty list
        """
        if self.winner is None or self.last_move is None:
            return []
        return self.board.get_winning_line(*self.last_move)

    def status_message(self) -> str:
        """Human readable description of whose turn it is or how the game ended."""
        if self.game_result == GameResult.DRAW:
            return "Draw! The board is full."
        if self.winner is not None:
            return f"{self.player_name(self.winner)} ({self.winner}) wins!"
        return f"{self.player_name(self.current_player)} ({self.current_player}), your move"

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            String representation of the board
        """
        return self.board.render()
