"""HTTP adapter tests driven through FastAPI's TestClient."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hello_world_service.adapters.http.app import (
    TRACE_HEADER,
    HealthResponse,
    Route,
    create_app,
    registered_paths,
)
from hello_world_service.domain.settings import Settings
from tests.support import FIXED_TIMESTAMP, make_client, make_service


def test_ping_without_query_greets_world() -> None:
    response = make_client().get("/ping")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Hello, World!",
        "timestamp": FIXED_TIMESTAMP,
        "version": "1.0.0",
    }


def test_ping_with_name() -> None:
    response = make_client().get("/ping", params={"name": "Dev"})
    assert response.status_code == 200
    assert response.json()["message"] == "Hello, Dev!"


def test_ping_with_empty_name_greets_world() -> None:
    response = make_client().get("/ping", params={"name": "  "})
    assert response.json()["message"] == "Hello, World!"


def test_ping_returns_markup_verbatim_as_json() -> None:
    response = make_client().get("/ping", params={"name": "<b>Dev</b>"})
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["message"] == "Hello, <b>Dev</b>!"


def test_ping_rejects_overlong_name() -> None:
    client = make_client(Settings(max_name_length=8))
    assert client.get("/ping", params={"name": "x" * 8}).status_code == 200
    assert client.get("/ping", params={"name": "x" * 9}).status_code == 422


def test_ping_honours_configured_route_and_emoji() -> None:
    client = make_client(Settings(route="/hello/v1/ping", emoji=True))
    assert client.get("/ping").status_code == 404
    message = client.get("/hello/v1/ping", params={"name": "Dev"}).json()["message"]
    assert message == "Hello, Dev! \N{WAVING HAND SIGN}"


def test_ping_rejects_post() -> None:
    assert make_client().post("/ping").status_code == 405


def test_health() -> None:
    response = make_client().get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_trace_header_is_echoed_or_generated() -> None:
    client = make_client()
    echoed = client.get("/ping", headers={TRACE_HEADER: "trace-abc"})
    assert echoed.headers[TRACE_HEADER] == "trace-abc"
    generated = client.get("/ping")
    assert len(generated.headers[TRACE_HEADER]) == 32


def test_request_log_carries_trace_id(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    make_client().get("/ping", headers={TRACE_HEADER: "trace-log"})
    served = [record for record in caplog.records if record.getMessage() == "request_served"]
    assert served
    context = getattr(served[-1], "context")
    assert context["trace_id"] == "trace-log"
    assert context["status"] == 200
    assert context["route"] == "/ping"


def test_lifespan_logs_start_and_stop(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="hello_world_service")
    with make_client():
        pass
    messages = [record.getMessage() for record in caplog.records]
    assert "service_started" in messages
    assert "service_stopped" in messages


def test_create_app_uses_explicit_route_table() -> None:
    async def ready() -> HealthResponse:
        return HealthResponse(status="ready")

    app = create_app(Settings(), make_service(), routes=[Route("/ready", ready, HealthResponse, "ready")])
    assert isinstance(app, FastAPI)
    assert "/ready" in registered_paths(app)
    assert "/ping" not in registered_paths(app)
    client = TestClient(app)
    assert client.get("/ready").json() == {"status": "ready"}
    assert client.get("/ping").status_code == 404
