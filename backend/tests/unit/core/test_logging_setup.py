"""Unit tests for the logging utilities."""

from __future__ import annotations

import json
import logging

from vidhub.core.logger import (
    JSONFormatter,
    RequestContextFilter,
    bind_user,
    configure_logging,
    ensure_request_id,
)


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")


def test_json_formatter_includes_whitelisted_extras() -> None:
    record = logging.LogRecord("vidhub.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    record.user_id = 7
    record.password = "never"
    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello x"
    assert payload["user_id"] == 7
    assert "password" not in payload


def test_request_id_reuses_incoming_header(app) -> None:
    with app.test_request_context(headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"


def test_request_id_generated_when_absent(app) -> None:
    with app.test_request_context():
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO
    configure_logging("WARNING")


def test_context_filter_tags_route_and_caller(app) -> None:
    record = logging.LogRecord("vidhub.test", logging.INFO, __file__, 1, "x", (), None)
    with app.test_request_context("/api/v1/users/current-user", headers={"X-Correlation-ID": "corr-1"}):
        bind_user(12)
        RequestContextFilter().filter(record)

    assert record.request_id == "corr-1"
    assert record.path == "/api/v1/users/current-user"
    assert record.method == "GET"
    assert record.user_id == 12


def test_context_filter_outside_request() -> None:
    record = logging.LogRecord("vidhub.test", logging.INFO, __file__, 1, "x", (), None)
    RequestContextFilter().filter(record)
    assert record.request_id is None
    assert not hasattr(record, "user_id")
