"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, and the CLI.
The greeting computation itself never raises; errors only come from settings
resolution and from the HTTP self-test performed by ``test-api``.

Contents
--------
* :class:`GreeterError` – umbrella base class for all service errors.
* :class:`InvalidSetting` – a configuration value has the wrong type or range.
* :class:`SelfTestError` – the ``test-api`` round trip did not succeed.
* :class:`EndpointUnreachable` – transport failure or non-success HTTP status.
* :class:`MalformedResponse` – the endpoint answered with an unexpected body.

System Role
-----------
Adapters raise these exceptions; the CLI lets them propagate so
``lib_cli_exit_tools`` prints the message and maps them to a nonzero exit code.
Callers catch :class:`GreeterError` to handle every failure uniformly.
"""

from __future__ import annotations


class GreeterError(Exception):
    """Base type for all exceptions emitted by ``hello_world_service``."""


class InvalidSetting(GreeterError):
    """Raised when a settings value cannot be used.

    Typical Sources
    ---------------
    Environment variables such as ``HELLO_WORLD_SERVICE_HTTP__PORT=abc`` or a
    route that does not start with ``/``.
    """


class SelfTestError(GreeterError):
    """Raised when ``test-api`` cannot confirm that the endpoint works."""


class EndpointUnreachable(SelfTestError):
    """The HTTP call failed at transport level or returned a non-2xx status."""


class MalformedResponse(SelfTestError):
    """The endpoint answered, but not with the documented JSON shape."""
