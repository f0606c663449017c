"""
Tests for the debug manager.
"""
import logging

from gravity4.debug import DebugLevel, DebugManager, parse_level


def test_parse_level():
    assert parse_level("debug") == DebugLevel.DEBUG
    assert parse_level(" TRACE ") == DebugLevel.TRACE
    assert parse_level("verbose") is None
    assert parse_level("") is None


def test_level_filtering():
    manager = DebugManager(level=DebugLevel.INFO)
    assert manager._should_log(DebugLevel.ERROR)
    assert manager._should_log(DebugLevel.INFO)
    assert not manager._should_log(DebugLevel.DEBUG)

    manager.configure(level=DebugLevel.NONE)
    assert not manager._should_log(DebugLevel.ERROR)


def test_component_filtering():
    manager = DebugManager(level=DebugLevel.DEBUG)
    manager.configure(components=["game"])
    assert manager._should_log(DebugLevel.DEBUG, "game")
    assert not manager._should_log(DebugLevel.DEBUG, "board")


def test_messages_reach_logger(caplog):
    manager = DebugManager(level=DebugLevel.TRACE)
    with caplog.at_level(logging.DEBUG, logger="gravity4"):
        manager.info("hello", "game")
        manager.trace("fine detail", "board")

    assert "[game] hello" in caplog.text
    assert "TRACE: [board] fine detail" in caplog.text


def test_set_from_string():
    manager = DebugManager(level=DebugLevel.WARNING)
    assert manager.set_from_string("info")
    assert manager.level == DebugLevel.INFO
    assert not manager.set_from_string("loud")
    assert manager.level == DebugLevel.INFO


def test_timer():
    manager = DebugManager()
    manager.start_timer("work")
    assert manager.end_timer("work") >= 0
    assert manager.end_timer("work") is None


def test_console_handler_is_shared():
    first = DebugManager()
    count = len(first._logger.handlers)
    second = DebugManager()

    assert second._logger is first._logger
    assert len(second._logger.handlers) == count
    consoles = [h for h in first._logger.handlers
                if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)]
    assert len(consoles) == 1
