"""Tests for registrygen.logging."""

from __future__ import annotations

import logging

from registrygen.logging import configure_logging, get_logger


def test_get_logger_names_live_under_the_package() -> None:
    assert get_logger().name == "registrygen"
    assert get_logger("builder").name == "registrygen.builder"


def test_levels_follow_flags() -> None:
    assert configure_logging().level == logging.INFO
    assert configure_logging(quiet=True).level == logging.WARNING
    assert configure_logging(verbose=True, quiet=True).level == logging.DEBUG


def test_reconfiguring_does_not_duplicate_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)
    assert len(logger.handlers) == 1
    assert logger.propagate is False
