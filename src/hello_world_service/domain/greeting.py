"""Domain-level greeting value objects.

Purpose
-------
Anchor the request/response records that both access paths (HTTP and CLI)
exchange with the greeting service. This module belongs to the domain layer and
contains no I/O: the timestamp is handed in by the caller.

Contents
--------
* :data:`DEFAULT_NAME` – display name used when the caller supplies nothing.
* :data:`SERVICE_VERSION` – semantic version reported in every response.
* :func:`normalize_name` – turns untrusted text into a plain display name.
* :class:`GreetingRequest` – immutable request record.
* :class:`GreetingResponse` – immutable response record with JSON payload helper.
* :func:`format_message` – builds ``"Hello, {name}!"`` with the optional suffix.

System Role
-----------
:class:`hello_world_service.application.greeter.GreetingService` composes these
types; adapters translate their transport inputs into :class:`GreetingRequest`
and serialise :class:`GreetingResponse` via :meth:`GreetingResponse.as_dict`.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, Final

DEFAULT_NAME: Final[str] = "World"
SERVICE_VERSION: Final[str] = "1.0.0"
EMOJI_SUFFIX: Final[str] = " \N{WAVING HAND SIGN}"


def normalize_name(value: str | None) -> str:
    """Return a non-empty plain-text display name for *value*.

    Why
    ----
    Names arrive from query strings and shell arguments. Line breaks, tabs and
    other control characters must never leak into messages or log lines.

    What
    ----
    Collapses whitespace runs into single spaces, drops the remaining control
    characters, trims the result and falls back to :data:`DEFAULT_NAME` when
    nothing is left.

    Collapsing goes beyond trimming: ``"A  B"`` becomes ``"A B"`` in API
    responses too. This follows the text-field sanitising of the CMS plugin
    the service replaces, so both report the same display name. Surrogate
    escapes (undecodable bytes from ``argv``) are not control characters and
    pass through unchanged.

    Examples
    --------
    >>> normalize_name("  Alice\\n Smith ")
    'Alice Smith'
    >>> normalize_name("\\t")
    'World'
    >>> normalize_name(None)
    'World'
    """

    if not value:
        return DEFAULT_NAME
    collapsed = " ".join(value.split())
    cleaned = "".join(ch for ch in collapsed if unicodedata.category(ch) != "Cc").strip()
    return cleaned or DEFAULT_NAME


def format_message(name: str, *, emoji: bool = False) -> str:
    """Return the greeting sentence for an already normalised *name*.

    >>> format_message("Dev")
    'Hello, Dev!'
    """

    message = f"Hello, {name}!"
    if emoji:
        message += EMOJI_SUFFIX
    return message


@dataclass(frozen=True, slots=True)
class GreetingRequest:
    """Caller intent: who should be greeted.

    ``name`` keeps the raw input; :attr:`display_name` is what ends up in the
    output.
    """

    name: str | None = None

    @property
    def display_name(self) -> str:
        return normalize_name(self.name)


@dataclass(frozen=True, slots=True)
class GreetingResponse:
    """Outcome of a single greeting call.

    Why
    ----
    Both access paths must emit the same shape so clients can switch between
    them without special cases.

    What
    ----
    Carries ``success`` (always ``True``), the rendered ``message``, the
    ISO-8601 ``timestamp`` captured at call time, and the service ``version``.

    Examples
    --------
    >>> response = GreetingResponse(message="Hello, World!", timestamp="2024-01-01T00:00:00+00:00")
    >>> response.as_dict()["version"]
    '1.0.0'
    """

    message: str
    timestamp: str
    version: str = SERVICE_VERSION
    success: bool = True

    def as_dict(self) -> dict[str, Any]:
        """Return the canonical JSON payload."""

        return {
            "success": self.success,
            "message": self.message,
            "timestamp": self.timestamp,
            "version": self.version,
        }


__all__ = [
    "DEFAULT_NAME",
    "EMOJI_SUFFIX",
    "SERVICE_VERSION",
    "GreetingRequest",
    "GreetingResponse",
    "format_message",
    "normalize_name",
]
