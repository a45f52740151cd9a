"""Application-layer greeting service.

Purpose
-------
Turn a :class:`~hello_world_service.domain.greeting.GreetingRequest` into a
:class:`~hello_world_service.domain.greeting.GreetingResponse` and render the
same greeting as an HTML fragment. Free of I/O apart from the injected clock so
alternative composition roots (HTTP, CLI, tests) share one implementation.

Contents
    - ``GreetingService``: stateless service object holding output options.
    - ``HTML_TEMPLATE``: fragment used by :meth:`GreetingService.render_html`.

System Role
-----------
Constructed by :mod:`hello_world_service.core` and handed to the HTTP adapter
and the CLI. Concurrent calls share no mutable state.
"""

from __future__ import annotations

import html
import logging
from typing import Final

from ..domain.greeting import GreetingRequest, GreetingResponse, SERVICE_VERSION, format_message
from ..observability import log_event
from .ports import Clock

HTML_TEMPLATE: Final[str] = '<div class="hello-world-shortcode" data-style="{style}"><p>{message}</p></div>'
DEFAULT_STYLE: Final[str] = "default"


class GreetingService:
    """Format greetings for any access path.

    Parameters
    ----------
    clock:
        Source of the response timestamp.
    emoji:
        Append the waving-hand suffix to every message.
    version:
        Version string reported in responses.
    """

    def __init__(self, clock: Clock, *, emoji: bool = False, version: str = SERVICE_VERSION) -> None:
        self._clock = clock
        self._emoji = emoji
        self._version = version

    @property
    def emoji(self) -> bool:
        return self._emoji

    def greet(self, name: str | None = None, *, channel: str = "api") -> GreetingResponse:
        """Return a fresh :class:`GreetingResponse` for *name*.

        Why
        ----
        Both the HTTP endpoint and the ``greet`` command must produce identical
        content for the same input.

        What
        ----
        Normalises *name* (absent or blank becomes ``"World"``), formats the
        message, and stamps it with the clock. The call never fails.

        Side Effects
        ------------
        Emits a ``greeting_built`` debug event carrying the name length only.

        Examples
        --------
        >>> class FixedClock:
        ...     def now(self) -> str:
        ...         return "2024-01-01T00:00:00+00:00"
        >>> GreetingService(FixedClock()).greet("Alice").message
        'Hello, Alice!'
        """

        request = GreetingRequest(name)
        display_name = request.display_name
        response = GreetingResponse(
            message=format_message(display_name, emoji=self._emoji),
            timestamp=self._clock.now(),
            version=self._version,
        )
        log_event("greeting_built", channel=channel, level=logging.DEBUG, name_length=len(display_name))
        return response

    def render_html(self, name: str | None = None, *, style: str = DEFAULT_STYLE) -> str:
        """Render the greeting as an HTML fragment with escaped input.

        >>> class FixedClock:
        ...     def now(self) -> str:
        ...         return ""
        >>> GreetingService(FixedClock()).render_html("<b>")
        '<div class="hello-world-shortcode" data-style="default"><p>Hello, &lt;b&gt;!</p></div>'
        """

        display_name = GreetingRequest(name).display_name
        message = format_message(html.escape(display_name, quote=True), emoji=self._emoji)
        log_event("greeting_rendered", channel="html", level=logging.DEBUG, name_length=len(display_name))
        return HTML_TEMPLATE.format(style=html.escape(style or DEFAULT_STYLE, quote=True), message=message)


__all__ = ["DEFAULT_STYLE", "GreetingService", "HTML_TEMPLATE"]
