"""
Tests for GameManager, the single-game session layer.
"""
import threading

import pytest

from gravity4.errors import (ColumnFullError, GameOverError, InvalidColumnError, MoveError,
                             InvalidSettingsError, NoActiveGameError)
from gravity4.game.manager import GameManager, validate_settings
from gravity4.game.random_source import NumpyRandomSource


def test_no_game_initially():
    manager = GameManager()
    assert not manager.has_game

    with pytest.raises(NoActiveGameError):
        manager.get_state()
    with pytest.raises(NoActiveGameError):
        manager.drop_piece(0)
    with pytest.raises(NoActiveGameError):
        manager.game


def test_new_game_returns_initial_state():
    manager = GameManager()
    data = manager.new_game(6, 9, "Alice", "Bob", random_source=NumpyRandomSource(seed=2))

    assert manager.has_game
    assert data["rows"] == 6
    assert data["cols"] == 9
    assert data["player1"] == "Alice"
    assert data["player2"] == "Bob"
    assert data["currentPlayer"] == "player1"
    assert data["turnCount"] == 0
    assert sum(cell != "" for row in data["board"] for cell in row) == 5
    assert manager.get_state() == data


@pytest.mark.parametrize("rows,cols", [(3, 7), (11, 7), (6, 3), (6, 11), (0, 0)])
def test_dimensions_are_validated(rows, cols):
    manager = GameManager()
    with pytest.raises(InvalidSettingsError):
        manager.new_game(rows, cols, "Alice", "Bob")
    assert not manager.has_game


@pytest.mark.parametrize("player1,player2", [("", "Bob"), ("Alice", ""), ("", "")])
def test_names_are_required(player1, player2):
    with pytest.raises(InvalidSettingsError):
        validate_settings(6, 7, player1, player2)


def test_boundary_dimensions_are_accepted():
    validate_settings(4, 4, "A", "B")
    validate_settings(10, 10, "A", "B")


def test_drop_piece_returns_new_state():
    manager = GameManager()
    manager.new_game(5, 5, "Alice", "Bob")

    data = manager.drop_piece(2)

    assert data["board"][4][2] == "player1"
    assert data["lastMove"] == {"row": 4, "col": 2}
    assert data["currentPlayer"] == "player2"


def test_move_errors_propagate():
    manager = GameManager(gravity_flip=False)
    manager.new_game(4, 4, "Alice", "Bob")
    for _ in range(4):
        manager.drop_piece(0)

    before = manager.get_state()
    with pytest.raises(ColumnFullError):
        manager.drop_piece(0)
    with pytest.raises(InvalidColumnError):
        manager.drop_piece(4)
    assert manager.get_state() == before


@pytest.mark.parametrize("column", [2.0, "3", True])
def test_non_integer_columns_are_move_errors(column):
    manager = GameManager()
    manager.new_game(6, 7, "Alice", "Bob")
    before = manager.get_state()

    with pytest.raises(MoveError):
        manager.drop_piece(column)
    assert manager.get_state() == before


def test_new_game_replaces_current_game():
    manager = GameManager()
    manager.new_game(5, 5, "Alice", "Bob")
    manager.drop_piece(0)

    data = manager.new_game(4, 6, "Carol", "Dave")

    assert data["turnCount"] == 0
    assert data["player1"] == "Carol"
    assert manager.get_state()["cols"] == 6


def test_reset():
    manager = GameManager()
    manager.reset()  # no game: nothing happens
    assert not manager.has_game

    manager.new_game(5, 5, "Alice", "Bob")
    manager.reset()
    assert not manager.has_game
    with pytest.raises(NoActiveGameError):
        manager.get_state()


def test_classic_manager_disables_twists():
    manager = GameManager(prefill=False, gravity_flip=False)
    data = manager.new_game(6, 7, "Alice", "Bob")
    assert all(cell == "" for row in data["board"] for cell in row)

    for column in range(6):
        data = manager.drop_piece(column)
    assert data["inverseGravity"] is False


def test_concurrent_drops_are_serialized():
    """Test that moves from several threads are all applied exactly once."""
    manager = GameManager(prefill=False, gravity_flip=False)
    manager.new_game(10, 10, "Alice", "Bob")
    finished = []

    def worker(column):
        try:
            manager.drop_piece(column)
        except GameOverError:
            finished.append(column)

    threads = [threading.Thread(target=worker, args=(col,)) for col in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    data = manager.get_state()
    placed = sum(cell != "" for row in data["board"] for cell in row)
    assert data["turnCount"] == placed == 10 - len(finished)
    assert placed >= 7
