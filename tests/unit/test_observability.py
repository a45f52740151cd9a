"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, request-scoped trace binding, and the request
fields the HTTP middleware attaches to every ``request_served`` event.
"""

from __future__ import annotations

import logging
import re
import time

import pytest

from hello_world_service import get_logger, trace_scope
from hello_world_service.observability import TRACE_ID, log_event, request_fields
from tests.support import make_client


def _served(caplog: pytest.LogCaptureFixture) -> list[dict[str, object]]:
    return [record.context for record in caplog.records if record.getMessage() == "request_served"]


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_scope_generates_hex_identifier() -> None:
    with trace_scope() as trace_id:
        assert re.fullmatch(r"[0-9a-f]{32}", trace_id)
        assert TRACE_ID.get() == trace_id
    assert TRACE_ID.get() is None


def test_trace_scope_restores_outer_identifier_on_error() -> None:
    with trace_scope("outer"):
        with pytest.raises(RuntimeError):
            with trace_scope("inner"):
                raise RuntimeError("boom")
        assert TRACE_ID.get() == "outer"
    assert TRACE_ID.get() is None


def test_log_event_carries_trace_and_channel(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    with trace_scope("trace-123"):
        log_event("greeting_built", channel="cli", name_length=5)
    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.context == {"trace_id": "trace-123", "channel": "cli", "name_length": 5}


def test_log_event_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    log_event("greeting_built", channel="cli", level=logging.DEBUG)
    assert not caplog.records


def test_request_fields_measure_elapsed_milliseconds() -> None:
    fields = request_fields("GET", "/ping", 200, time.perf_counter() - 0.25)
    assert {key: fields[key] for key in ("method", "route", "status")} == {"method": "GET", "route": "/ping", "status": 200}
    assert 250.0 <= fields["duration_ms"] < 5000.0
    assert fields["duration_ms"] == round(fields["duration_ms"], 1)


def test_middleware_logs_request_with_caller_trace(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    with make_client() as client:
        response = client.get("/ping", params={"name": "Dev"}, headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"
    (context,) = _served(caplog)
    assert context["trace_id"] == "req-42"
    assert context["channel"] == "http"
    assert (context["method"], context["route"], context["status"]) == ("GET", "/ping", 200)
    assert isinstance(context["duration_ms"], float)
    assert TRACE_ID.get() is None


def test_middleware_logs_rejected_requests(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    with make_client() as client:
        response = client.post("/ping")
    (context,) = _served(caplog)
    assert context["status"] == 405
    assert context["trace_id"] == response.headers["X-Request-ID"]


def test_middleware_scopes_trace_per_request(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    with make_client() as client:
        first = client.get("/ping").headers["X-Request-ID"]
        second = client.get("/ping").headers["X-Request-ID"]
    assert first != second
    assert [context["trace_id"] for context in _served(caplog)] == [first, second]
