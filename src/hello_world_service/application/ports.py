"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the greeting service and the CLI depend on so
the composition root can swap implementations (tests use a frozen clock and an
in-process HTTP client) without touching the application layer.

Contents
--------
* :class:`Clock` – supplies the wall-clock timestamp embedded in responses.
* :class:`EnvLoader` – materialises environment variables into nested settings.
* :class:`GreetingClient` – fetches a greeting from a running HTTP endpoint.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). Each adapter implements one
protocol so the application layer can request behaviour via abstraction.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Provide the current wall-clock time as a string.

    Why
    ----
    Responses carry a timestamp; injecting the clock keeps
    :class:`~hello_world_service.application.greeter.GreetingService` pure and
    lets tests pin the value.
    """

    def now(self) -> str:
        """Return the current time formatted as ISO-8601."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate process environment variables into nested settings dictionaries."""

    def load(self, prefix: str) -> Mapping[str, object]:
        """Return variables that match *prefix* (case-insensitive, ``__`` for nesting)."""


@runtime_checkable
class GreetingClient(Protocol):
    """Request a greeting from a remote greeting endpoint.

    Why
    ----
    ``test-api`` verifies a deployed endpoint; the CLI should not care whether
    the call crosses a socket or stays in-process.
    """

    def ping(self, name: str | None = None) -> Mapping[str, Any]:
        """Return the decoded JSON payload or raise ``SelfTestError``."""
