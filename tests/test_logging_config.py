"""Tests for root logger setup."""

import logging

import pytest

from pace_registry_api.app.core.logging_config import (
    CONSOLE_HANDLER_NAME,
    FILE_HANDLER_PREFIX,
    setup_logging,
)


@pytest.fixture
def root_logger():
    """The root logger, restored to its previous handlers and level."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _named(root, prefix):
    return [h for h in root.handlers if (h.get_name() or "").startswith(prefix)]


def test_level_applies_on_every_call(root_logger):
    setup_logging("INFO")
    assert root_logger.level == logging.INFO
    setup_logging("debug")
    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.INFO


def test_repeated_setup_adds_one_console_handler(root_logger):
    setup_logging("INFO")
    setup_logging("WARNING")
    assert len(_named(root_logger, CONSOLE_HANDLER_NAME)) == 1


def test_level_applies_alongside_foreign_handlers(root_logger):
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)
    setup_logging("ERROR")
    assert root_logger.level == logging.ERROR
    assert foreign in root_logger.handlers


def test_file_handler_writes_and_is_added_once(root_logger, tmp_path):
    logfile = tmp_path / "registry.log"
    setup_logging("INFO", str(logfile))
    setup_logging("INFO", str(logfile))
    assert len(_named(root_logger, FILE_HANDLER_PREFIX)) == 1

    logging.getLogger("pace_registry_api.test").warning("log file check")
    for handler in _named(root_logger, FILE_HANDLER_PREFIX):
        handler.flush()
    text = logfile.read_text(encoding="utf-8")
    assert "[WARNING] pace_registry_api.test: log file check" in text
