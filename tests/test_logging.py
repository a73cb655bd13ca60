# tests/test_logging.py

"""
Tests for the club logger setup.
"""

import logging

import pytest

from core.logging_config import LOGGER_NAME, resolve_log_level, setup_logger


@pytest.mark.parametrize(
    "name, level",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("verbose", logging.INFO),
        ("", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_resolve_log_level(name, level):
    assert resolve_log_level(name) == level


def test_setup_logger_applies_level_without_duplicate_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    previous = logger.level

    try:
        assert setup_logger("DEBUG") is logger
        assert logger.level == logging.DEBUG
        assert logger.handlers == handlers
    finally:
        logger.setLevel(previous)


def test_setup_logger_reads_configured_level(monkeypatch):
    logger = logging.getLogger(LOGGER_NAME)
    previous = logger.level
    monkeypatch.setattr("core.logging_config.settings.LOG_LEVEL", "ERROR")

    try:
        setup_logger()
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(previous)
