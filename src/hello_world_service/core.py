"""Composition root for ``hello_world_service``.

Purpose
-------
Provide the single place that wires settings, the clock adapter, the greeting
service and the HTTP application together. The CLI and library consumers call
these helpers; they never construct adapters themselves.

Contents
--------
* :data:`SERVICE_SLUG` – slug used for the environment prefix and the CLI program name.
* :func:`load_settings` – environment variables -> :class:`Settings`.
* :func:`build_greeting_service` – service wired with the system clock.
* :func:`build_app` – FastAPI application for the given settings.
* :func:`greet` / :func:`render_greeting_html` – one-call conveniences.

System Role
-----------
This module connects adapters (environment, clock, HTTP) with the application
service while emitting structured observability signals. It is the canonical
location for wiring new adapters.
"""

from __future__ import annotations

import logging
from typing import Final, Mapping

from fastapi import FastAPI

from .adapters.clock.default import SystemClock
from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.http.app import create_app
from .application.greeter import DEFAULT_STYLE, GreetingService
from .application.ports import Clock, EnvLoader
from .domain.errors import InvalidSetting
from .domain.greeting import GreetingResponse
from .domain.settings import Settings
from .observability import log_event

SERVICE_SLUG: Final[str] = "hello-world-service"


def load_settings(
    *,
    environ: Mapping[str, str] | None = None,
    loader: EnvLoader | None = None,
    strict: bool = True,
) -> Settings:
    """Return settings resolved from ``HELLO_WORLD_SERVICE_*`` variables.

    Why
    ----
    Deployments tune host, port and output options without code changes;
    everything else reads the returned immutable record.

    Parameters
    ----------
    environ:
        Mapping to read instead of :data:`os.environ`.
    loader:
        Alternative :class:`~hello_world_service.application.ports.EnvLoader`.
    strict:
        When ``False``, unusable values fall back to their defaults and are
        reported through a ``settings_rejected`` error event instead of
        raising. Commands that read one or two fields use this mode.

    Raises
    ------
    InvalidSetting
        In strict mode, when a variable has an unusable value or a scalar
        collides with a nested key.

    Examples
    --------
    >>> load_settings(environ={"HELLO_WORLD_SERVICE_HTTP__PORT": "9000"}).port
    9000
    >>> load_settings(environ={}).route
    '/ping'
    """

    env_loader = loader or DefaultEnvLoader(environ=environ)
    try:
        data = env_loader.load(default_env_prefix(SERVICE_SLUG))
    except ValueError as exc:
        if strict:
            raise InvalidSetting(str(exc)) from exc
        log_event("settings_rejected", channel="env", level=logging.ERROR, errors={"environment": str(exc)})
        return Settings()
    if strict:
        settings = Settings.from_mapping(data)
    else:
        settings, rejected = Settings.from_mapping_lenient(data)
        if rejected:
            log_event("settings_rejected", channel="env", level=logging.ERROR, errors=rejected)
    log_event("settings_loaded", channel="env", level=logging.DEBUG, keys=sorted(data))
    return settings


def build_greeting_service(settings: Settings, *, clock: Clock | None = None) -> GreetingService:
    """Return a :class:`GreetingService` honouring the output options in *settings*."""

    return GreetingService(clock or SystemClock(), emoji=settings.emoji)


def build_app(settings: Settings | None = None, *, clock: Clock | None = None) -> FastAPI:
    """Return the FastAPI application for *settings* (environment when omitted)."""

    resolved = settings if settings is not None else load_settings()
    return create_app(resolved, build_greeting_service(resolved, clock=clock))


def greet(name: str | None = None, *, emoji: bool = False, clock: Clock | None = None) -> GreetingResponse:
    """Greet *name* with default wiring.

    Examples
    --------
    >>> greet().message
    'Hello, World!'
    >>> greet("Alice").message
    'Hello, Alice!'
    """

    return GreetingService(clock or SystemClock(), emoji=emoji).greet(name)


def render_greeting_html(name: str | None = None, *, style: str = DEFAULT_STYLE, emoji: bool = False) -> str:
    """Render the greeting as an escaped HTML fragment.

    >>> "&lt;script&gt;" in render_greeting_html("<script>")
    True
    """

    return GreetingService(SystemClock(), emoji=emoji).render_html(name, style=style)


__all__ = [
    "SERVICE_SLUG",
    "build_app",
    "build_greeting_service",
    "greet",
    "load_settings",
    "render_greeting_html",
]
