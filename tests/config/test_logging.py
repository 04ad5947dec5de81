# topmark:header:start
#
#   project      : CartSniff
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE level, env-driven log level and the chalk formatter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cartsniff.config.logging import (
    TRACE_LEVEL,
    CartsniffLogger,
    ChalkFormatter,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from cartsniff.constants import LOG_LEVEL_ENV_VAR
from tests.conftest import parametrize

if TYPE_CHECKING:
    import pytest


def test_trace_is_below_debug() -> None:
    assert TRACE_LEVEL == logging.DEBUG - 5
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_get_logger_returns_a_cartsniff_logger() -> None:
    assert isinstance(get_logger("cartsniff.tests.logging"), CartsniffLogger)


def test_trace_messages_are_emitted(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("cartsniff.tests.trace")
    with caplog.at_level(TRACE_LEVEL):
        logger.trace("probing %s", "E0")

    (record,) = [r for r in caplog.records if r.name == "cartsniff.tests.trace"]
    assert record.levelno == TRACE_LEVEL
    assert record.getMessage() == "probing E0"


@parametrize(
    ("value", "expected"),
    [("TRACE", TRACE_LEVEL), ("debug", logging.DEBUG), ("30", 30), ("bogus", None), ("", None)],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None
) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, value)
    assert resolve_env_log_level() == expected


def test_resolve_env_log_level_unset() -> None:
    assert resolve_env_log_level() is None


def test_setup_logging_uses_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "INFO")
        setup_logging()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ChalkFormatter)
    finally:
        setup_logging(level=previous)


def test_chalk_formatter_keeps_the_message() -> None:
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful %d", (3,), None)
    assert "careful 3" in ChalkFormatter("%(message)s").format(record)
