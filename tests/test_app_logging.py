"""Tests for logging configuration."""

import logging

from catalog_studio.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("catalog_studio")
    logger.handlers.clear()

    configure_logging()
    configure_logging(logging.DEBUG)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
