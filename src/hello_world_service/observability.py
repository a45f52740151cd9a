"""Structured logging for greeting requests.

Purpose
    Every event the service emits names the access path it came from (``http``,
    ``cli``, ``html``, ``env``) and, while an HTTP request is in flight, the
    trace identifier of that request. The package stays silent until the host
    attaches a handler.

Contents
    - ``TRACE_ID``: context variable holding the identifier of the current request.
    - ``get_logger``: the package logger (``NullHandler`` attached).
    - ``trace_scope``: binds a trace identifier for a block and restores the
      previous one afterwards.
    - ``log_event``: the single emitter; fields land in ``record.context``.
    - ``request_fields``: method/route/status/duration payload for served requests.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Final, Iterator
from uuid import uuid4

TRACE_ID: ContextVar[str | None] = ContextVar("hello_world_service_trace_id", default=None)

_LOGGER: Final[logging.Logger] = logging.getLogger("hello_world_service")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so hosts may attach handlers."""

    return _LOGGER


@contextmanager
def trace_scope(trace_id: str | None = None) -> Iterator[str]:
    """Bind *trace_id* (or a fresh hex UUID) for the duration of the block.

    Scopes nest: leaving an inner scope restores the outer identifier.

    Examples
    --------
    >>> with trace_scope("outer"):
    ...     with trace_scope("inner"):
    ...         inner = TRACE_ID.get()
    ...     outer = TRACE_ID.get()
    >>> inner, outer, TRACE_ID.get() is None
    ('inner', 'outer', True)
    """

    bound = trace_id or uuid4().hex
    token = TRACE_ID.set(bound)
    try:
        yield bound
    finally:
        TRACE_ID.reset(token)


def log_event(event: str, *, channel: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit *event* for *channel* with the active trace identifier attached."""

    if not _LOGGER.isEnabledFor(level):
        return
    context: dict[str, Any] = {"trace_id": TRACE_ID.get(), "channel": channel}
    context.update(fields)
    _LOGGER.log(level, event, extra={"context": context})


def request_fields(method: str, route: str, status: int, started: float) -> dict[str, Any]:
    """Return the payload logged for one served request.

    ``started`` is a :func:`time.perf_counter` reading taken when the request
    arrived; the duration is reported in milliseconds with one decimal.
    """

    return {
        "method": method,
        "route": route,
        "status": status,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 1),
    }
