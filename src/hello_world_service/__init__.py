"""Public package surface for the greeting service.

Exporting :func:`greet` here allows both ``import hello_world_service`` and
``python -m hello_world_service`` flows to exercise the same application
service.
"""

from __future__ import annotations

from .core import build_app, build_greeting_service, greet, load_settings, render_greeting_html
from .domain.errors import EndpointUnreachable, GreeterError, InvalidSetting, MalformedResponse, SelfTestError
from .domain.greeting import DEFAULT_NAME, SERVICE_VERSION, GreetingRequest, GreetingResponse
from .domain.settings import Settings
from .observability import get_logger, trace_scope

__all__ = [
    "DEFAULT_NAME",
    "SERVICE_VERSION",
    "EndpointUnreachable",
    "GreeterError",
    "GreetingRequest",
    "GreetingResponse",
    "InvalidSetting",
    "MalformedResponse",
    "SelfTestError",
    "Settings",
    "build_app",
    "build_greeting_service",
    "get_logger",
    "greet",
    "load_settings",
    "render_greeting_html",
    "trace_scope",
]
