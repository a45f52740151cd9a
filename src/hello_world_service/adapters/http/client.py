"""HTTP client used by the ``test-api`` self-test.

Implements :class:`~hello_world_service.application.ports.GreetingClient` on
top of a caller-supplied :class:`httpx.Client`, so tests can pass FastAPI's
``TestClient`` (an ``httpx.Client`` subclass) and exercise the real endpoint
in-process.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ...domain.errors import EndpointUnreachable, MalformedResponse
from ...observability import log_event

REQUIRED_FIELDS = ("message", "timestamp")


class HttpGreetingClient:
    """Call ``GET {route}?name=...`` and validate the JSON payload."""

    def __init__(self, http_client: httpx.Client, *, route: str = "/ping") -> None:
        """Initialize with a shared HTTP client.

        Args:
            http_client: Client whose ``base_url`` points at the service.
            route: Path of the greeting endpoint.
        """
        self._client = http_client
        self._route = route

    def ping(self, name: str | None = None) -> Mapping[str, Any]:
        """Return the decoded greeting payload.

        Raises:
            EndpointUnreachable: transport error or non-2xx status.
            MalformedResponse: body is not a JSON object with string
                ``message`` and ``timestamp`` fields.
        """
        params = {"name": name} if name else None
        log_event("self_test_request", channel="cli", level=logging.DEBUG, route=self._route, has_name=bool(name))
        try:
            response = self._client.get(self._route, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log_event(
                "self_test_failed", channel="cli", level=logging.ERROR, route=self._route, status=exc.response.status_code
            )
            raise EndpointUnreachable(
                f"Greeting endpoint {exc.request.url} answered with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            log_event(
                "self_test_failed", channel="cli", level=logging.ERROR, route=self._route, error=type(exc).__name__
            )
            raise EndpointUnreachable(f"Greeting endpoint {self._route} is unreachable: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Greeting endpoint {self._route} did not return JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedResponse(f"Expected a JSON object from {self._route}, got {type(payload).__name__}")
        missing = [key for key in REQUIRED_FIELDS if not isinstance(payload.get(key), str)]
        if missing:
            raise MalformedResponse(f"Response from {self._route} lacks string field(s): {', '.join(missing)}")
        return payload
