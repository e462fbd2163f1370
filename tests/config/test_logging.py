# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging setup: TRACE level and environment-driven level resolution."""

from __future__ import annotations

import logging

import pytest

from autojsongen.config.logging import (
    TRACE_LEVEL,
    AutoJsonLogger,
    ChalkFormatter,
    get_logger,
    resolve_env_log_level,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("trace", TRACE_LEVEL),
        ("DEBUG", logging.DEBUG),
        (" warn ", logging.WARNING),
        ("10", 10),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(value: str, expected: int | None) -> None:
    assert resolve_env_log_level({"AUTOJSON_LOG_LEVEL": value}) == expected


def test_resolve_env_log_level_unset() -> None:
    assert resolve_env_log_level({}) is None


def test_get_logger_supports_trace(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("autojsongen.tests.trace")
    assert isinstance(logger, AutoJsonLogger)

    with caplog.at_level(TRACE_LEVEL, logger="autojsongen.tests.trace"):
        logger.trace("tracing %s", "value")

    assert any(r.levelname == "TRACE" and r.getMessage() == "tracing value" for r in caplog.records)


def test_chalk_formatter_keeps_message() -> None:
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)

    assert "careful" in ChalkFormatter("%(message)s").format(record)
