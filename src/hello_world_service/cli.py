"""CLI adapter for ``hello_world_service`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the greeting service on the command line: print greetings, render the
HTML fragment, run the HTTP endpoint, and verify a running endpoint end to end.

Contents
--------
* :func:`cli` – root group; ``--traceback`` feeds ``lib_cli_exit_tools``.
* :func:`cli_greet` – prints the greeting message for an optional name.
* :func:`cli_status` – static status block, also reachable as ``info``.
* :func:`cli_render` – prints the escaped HTML fragment.
* :func:`cli_serve` – serves the HTTP endpoint through uvicorn.
* :func:`cli_test_api` – calls the HTTP endpoint and validates the answer.
* :func:`main` – ``console_scripts`` entry point returning the exit code.

System Role
-----------
``greet``, ``status``/``info`` and ``render`` only read output options, so
they resolve settings leniently and never fail on an unrelated broken
variable. ``serve`` and ``test-api`` depend on the HTTP settings and resolve
them strictly. Failures propagate to :func:`main`, where
``lib_cli_exit_tools`` prints the message and picks the exit code.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Final, Iterator, Optional, Sequence

import httpx
import lib_cli_exit_tools
import rich_click as click
import uvicorn

from .adapters.http.app import create_app, registered_paths
from .adapters.http.client import HttpGreetingClient
from .application.greeter import DEFAULT_STYLE
from .core import SERVICE_SLUG, build_greeting_service, load_settings
from .domain.greeting import SERVICE_VERSION
from .domain.settings import Settings
from .observability import log_event

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

SERVICE_TITLE: Final[str] = "Hello World Service"
RENDER_COMMAND: Final[str] = "render"


@click.group(help="Greeting service with an HTTP endpoint and command line access", context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=SERVICE_VERSION, prog_name=SERVICE_SLUG)
@click.option("--traceback/--no-traceback", default=False, help="Show full Python traceback on errors")
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Store the traceback preference where :func:`main` reads it."""

    ctx.ensure_object(dict)
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


def _settings(ctx: click.Context, *, strict: bool = True) -> Settings:
    """Return settings injected on the context, or resolve them from the environment.

    Strictly resolved settings are cached on the context; lenient ones are
    rebuilt per command since they may carry defaults in place of bad values.
    """

    obj = ctx.ensure_object(dict)
    settings = obj.get("settings")
    if settings is None:
        settings = load_settings(strict=strict)
        if strict:
            obj["settings"] = settings
    return settings


@cli.command("greet", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name", required=False)
@click.option("--emoji/--no-emoji", default=None, help="Append a waving hand to the message")
@click.pass_context
def cli_greet(ctx: click.Context, name: Optional[str], emoji: Optional[bool]) -> None:
    """Print a greeting for NAME (defaults to World).

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["greet", "Alice"], obj={"settings": Settings()})
    >>> result.output.strip()
    'Hello, Alice!'
    """

    settings = _settings(ctx, strict=False).with_overrides(emoji=emoji)
    response = build_greeting_service(settings).greet(name, channel="cli")
    click.echo(response.message)


def _status_lines(settings: Settings) -> list[str]:
    app = create_app(settings, build_greeting_service(settings))
    title = f"{SERVICE_TITLE} Status:"
    return [
        title,
        "-" * len(title),
        f"Version: {SERVICE_VERSION}",
        "Status: Active",
        f"HTML renderer [hello_world]: {_mark(RENDER_COMMAND in cli.commands)}",
        f"HTTP endpoint {settings.route}: {_mark(settings.route in registered_paths(app))}",
        "Success: Service is working correctly!",
    ]


def _mark(registered: bool) -> str:
    return "\N{CHECK MARK} Registered" if registered else "\N{BALLOT X} Not found"


@cli.command("status", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_status(ctx: click.Context) -> None:
    """Show service status: version and which access paths are registered."""

    for line in _status_lines(_settings(ctx, strict=False)):
        click.echo(line)


cli.add_command(cli_status, name="info")


@cli.command(RENDER_COMMAND, context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name", required=False)
@click.option("--style", default=DEFAULT_STYLE, show_default=True, help="Value of the data-style attribute")
@click.option("--emoji/--no-emoji", default=None, help="Append a waving hand to the message")
@click.pass_context
def cli_render(ctx: click.Context, name: Optional[str], style: str, emoji: Optional[bool]) -> None:
    """Print the greeting for NAME as an HTML fragment with escaped input."""

    settings = _settings(ctx, strict=False).with_overrides(emoji=emoji)
    click.echo(build_greeting_service(settings).render_html(name, style=style))


@cli.command("serve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--host", default=None, help="Interface to bind (overrides HTTP__HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (overrides HTTP__PORT)")
@click.pass_context
def cli_serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Serve the greeting endpoint over HTTP until interrupted."""

    settings = _settings(ctx).with_overrides(host=host, port=port)
    app = create_app(settings, build_greeting_service(settings))
    log_event("serve_requested", channel="cli", route=settings.route, host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@cli.command("test-api", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name", required=False)
@click.option("--base-url", default=None, help="Service URL (overrides HTTP__BASE_URL)")
@click.pass_context
def cli_test_api(ctx: click.Context, name: Optional[str], base_url: Optional[str]) -> None:
    """Call the running HTTP endpoint and check the response shape.

    Exits nonzero with the failure message when the endpoint is unreachable or
    answers with an unexpected body.
    """

    settings = _settings(ctx).with_overrides(base_url=base_url)
    with _open_http_client(settings) as http_client:
        payload = HttpGreetingClient(http_client, route=settings.route).ping(name)
    click.echo(f"Success: {payload['message']}")
    click.echo(f"Timestamp: {payload['timestamp']}")


def _open_http_client(settings: Settings) -> httpx.Client:
    """Return the HTTP client ``test-api`` talks through."""

    return httpx.Client(base_url=settings.base_url, timeout=settings.timeout)


@contextmanager
def _restored_traceback_config(enabled: bool) -> Iterator[None]:
    """Put ``lib_cli_exit_tools.config`` traceback flags back after the block."""

    config = lib_cli_exit_tools.config
    saved = (getattr(config, "traceback", False), getattr(config, "traceback_force_color", False))
    try:
        yield
    finally:
        if enabled:
            config.traceback, config.traceback_force_color = saved


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Exceptions escaping a command (``SelfTestError`` from ``test-api``,
    ``InvalidSetting`` from ``serve``) are printed to stderr by
    ``lib_cli_exit_tools``; the full traceback appears with ``--traceback``.
    """

    with _restored_traceback_config(restore_traceback):
        try:
            return lib_cli_exit_tools.run_cli(cli, argv=list(argv) if argv is not None else None, prog_name=SERVICE_SLUG)
        except BaseException as exc:  # noqa: BLE001 - every failure is reported through the exit tools
            verbose = bool(lib_cli_exit_tools.config.traceback)
            log_event("command_failed", channel="cli", level=logging.ERROR, error=type(exc).__name__)
            lib_cli_exit_tools.print_exception_message(
                trace_back=verbose,
                length_limit=_TRACEBACK_VERBOSE_LIMIT if verbose else _TRACEBACK_SUMMARY_LIMIT,
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
