"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging
import sys

from tokenauth.core.logger import JSONFormatter, configure_logging


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tokenauth.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info() -> None:
    configure_logging("chatty")

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_configure_logging_installs_single_json_handler() -> None:
    configure_logging("INFO")
    configure_logging("INFO")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JSONFormatter)


def test_json_formatter_payload() -> None:
    payload = json.loads(JSONFormatter().format(_record("auth.logout", removed=1, request_id="rid")))

    assert payload["message"] == "auth.logout"
    assert payload["level"] == "INFO"
    assert payload["name"] == "tokenauth.test"
    assert payload["request_id"] == "rid"
    assert payload["removed"] == 1
    assert "subject" not in payload


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record("failed")
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]
