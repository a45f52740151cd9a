"""HTTP adapter exposing the greeting service through FastAPI.

Purpose
-------
Translate ``GET /ping?name=...`` into a
:meth:`~hello_world_service.application.greeter.GreetingService.greet` call and
serialise the response as JSON. Routes are declared in an explicit table handed
to :func:`create_app`; nothing registers itself globally.

Contents
--------
* :class:`PingResponse` / :class:`HealthResponse` – wire schemas.
* :class:`Route` – one row of the route table.
* :func:`build_routes` – the default table (greeting endpoint + health check).
* :func:`create_app` – FastAPI application factory.
* :func:`registered_paths` – paths served by an application, used by ``status``.

System Role
-----------
Outermost layer, next to the CLI. The endpoint is public by design: it returns
nothing that is not derived from the query string and the clock.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Final, Sequence

from fastapi import FastAPI, Query, Request
from pydantic import BaseModel

from ...application.greeter import GreetingService
from ...domain.greeting import SERVICE_VERSION
from ...domain.settings import Settings
from ...observability import log_event, request_fields, trace_scope

TRACE_HEADER: Final[str] = "X-Request-ID"
HEALTH_PATH: Final[str] = "/health"


class PingResponse(BaseModel):
    """JSON body returned by the greeting endpoint."""

    success: bool
    message: str
    timestamp: str
    version: str


class HealthResponse(BaseModel):
    status: str


@dataclass(frozen=True)
class Route:
    """Declarative route registration passed into :func:`create_app`."""

    path: str
    endpoint: Callable[..., Any]
    response_model: type[BaseModel]
    name: str
    methods: tuple[str, ...] = ("GET",)


def build_routes(settings: Settings, service: GreetingService) -> list[Route]:
    """Return the default route table for *settings* and *service*.

    The ``name`` query parameter is bounded by ``settings.max_name_length``;
    longer values are rejected by FastAPI with a ``422`` validation response.
    """

    async def ping(
        name: str | None = Query(default=None, max_length=settings.max_name_length),
    ) -> PingResponse:
        response = service.greet(name, channel="http")
        return PingResponse(**response.as_dict())

    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    return [
        Route(path=settings.route, endpoint=ping, response_model=PingResponse, name="ping"),
        Route(path=HEALTH_PATH, endpoint=health, response_model=HealthResponse, name="health"),
    ]


def create_app(
    settings: Settings,
    service: GreetingService,
    routes: Sequence[Route] | None = None,
) -> FastAPI:
    """Create the FastAPI application serving *routes*.

    Why
    ----
    Tests, ``serve`` and ``status`` all need an application built from the
    same settings; a factory keeps construction free of import-time effects.

    What
    ----
    Registers every row of the route table, installs a middleware that binds a
    trace identifier per request (taken from ``X-Request-ID`` when present and
    echoed back), and logs start/stop through the lifespan hook.

    Examples
    --------
    >>> from hello_world_service.adapters.clock.default import SystemClock
    >>> app = create_app(Settings(), GreetingService(SystemClock()))
    >>> sorted(registered_paths(app) & {"/ping", "/health"})
    ['/health', '/ping']
    """

    table = list(routes) if routes is not None else build_routes(settings, service)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log_event("service_started", channel="http", route=settings.route, version=SERVICE_VERSION)
        yield
        log_event("service_stopped", channel="http", route=settings.route)

    app = FastAPI(
        title="Hello World Service",
        version=SERVICE_VERSION,
        description="Public greeting endpoint",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.greeting_service = service

    @app.middleware("http")
    async def bind_request_trace(request: Request, call_next):
        started = time.perf_counter()
        with trace_scope(request.headers.get(TRACE_HEADER)) as trace_id:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            log_event(
                "request_served",
                channel="http",
                **request_fields(request.method, request.url.path, response.status_code, started),
            )
        return response

    for route in table:
        app.add_api_route(
            route.path,
            route.endpoint,
            methods=list(route.methods),
            response_model=route.response_model,
            name=route.name,
        )
    return app


def registered_paths(app: FastAPI) -> set[str]:
    """Return every path the application routes requests to."""

    return {path for path in (getattr(route, "path", None) for route in app.routes) if path}


__all__ = [
    "HEALTH_PATH",
    "HealthResponse",
    "PingResponse",
    "Route",
    "TRACE_HEADER",
    "build_routes",
    "create_app",
    "registered_paths",
]
