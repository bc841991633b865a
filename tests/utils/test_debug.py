"""Tests for linkgnome.utils.debug.setup_logger."""

import logging

import pytest

from linkgnome.utils.debug import LOG_FORMAT, setup_logger


@pytest.fixture(autouse=True)
def clean_logger(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LINKGNOME_DEBUG", raising=False)
    logger = logging.getLogger("linkgnome")
    saved = list(logger.handlers), logger.level
    logger.handlers.clear()
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])


def test_setup_logger_installs_one_handler() -> None:
    logger = setup_logger()
    setup_logger()
    assert logger.name == "linkgnome"
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT
    assert logger.level == logging.INFO


def test_verbose_enables_debug() -> None:
    assert setup_logger(verbose=True).level == logging.DEBUG


def test_env_enables_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINKGNOME_DEBUG", "1")
    assert setup_logger().level == logging.DEBUG
