# topmark:header:start
#
#   project      : BuildProblems
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the BuildProblems logging helpers."""

from __future__ import annotations

import logging

import pytest

from buildproblems.config.logging import (
    TRACE_LEVEL,
    ChalkFormatter,
    ProblemsLogger,
    get_logger,
    resolve_env_log_level,
)
from buildproblems.constants import LOG_LEVEL_ENV_VAR
from tests.conftest import parametrize


@parametrize(
    "value, expected",
    [
        ("TRACE", TRACE_LEVEL),
        ("debug", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("10", 10),
        ("nonsense", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None
) -> None:
    """Level names (any case) and numbers are accepted; unknown names are ignored."""
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, value)
    assert resolve_env_log_level() == expected


def test_resolve_env_log_level_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without the variable no level is forced."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    assert resolve_env_log_level() is None


def test_get_logger_returns_problems_logger() -> None:
    """Package loggers support ``trace``."""
    log = get_logger("buildproblems.tests.logging")
    assert isinstance(log, ProblemsLogger)
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_trace_records_are_emitted(caplog: pytest.LogCaptureFixture) -> None:
    """``trace`` logs at the TRACE level when enabled."""
    caplog.set_level(TRACE_LEVEL, logger="buildproblems")
    get_logger("buildproblems.tests.logging").trace("step %s", 1)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(TRACE_LEVEL, "step 1")]


def test_chalk_formatter_keeps_message_text() -> None:
    """Colors wrap the message; the text itself is preserved."""
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hello %s", ("you",), None)
    assert "hello you" in ChalkFormatter("%(message)s").format(record)
