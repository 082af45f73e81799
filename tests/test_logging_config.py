"""Tests for the logging setup."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from hourly_forecast.logging_config import configure_logging

CONFIGURED = ["uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "fastapi"]


@pytest.fixture(autouse=True)
def restore_loggers() -> Iterator[None]:
    names = [None, *CONFIGURED]
    saved = {}
    for name in names:
        logger = logging.getLogger(name)
        saved[name] = (logger.level, logger.handlers[:], logger.propagate)
    yield
    for name, (level, handlers, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers
        logger.propagate = propagate


class TestConfigureLogging:

    @pytest.mark.parametrize(("name", "expected"), [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("Error", logging.ERROR),
    ])
    def test_level_names(self, name: str, expected: int) -> None:
        configure_logging(name)
        assert logging.getLogger().level == expected
        assert logging.getLogger("httpx").level == expected

    @pytest.mark.parametrize("name", ["bogus", "", "Level 5", "NOTSET"])
    def test_unknown_level_falls_back_to_info(self, name: str) -> None:
        configure_logging(name)
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger().handlers[0].level == logging.INFO

    def test_single_root_handler(self) -> None:
        configure_logging("info")
        configure_logging("info")
        assert len(logging.getLogger().handlers) == 1

    @pytest.mark.parametrize("name", CONFIGURED)
    def test_third_party_loggers_do_not_propagate(self, name: str) -> None:
        configure_logging("info")
        logger = logging.getLogger(name)
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
