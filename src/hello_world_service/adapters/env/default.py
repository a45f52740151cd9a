"""Environment variable adapter.

Purpose
-------
Translate process environment variables into the nested mapping consumed by
:meth:`hello_world_service.domain.settings.Settings.from_mapping`.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are captured.
* Supports ``__`` as a nesting delimiter
  (``HTTP__PORT`` -> ``{"http": {"port": ...}}``).
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
"""

from __future__ import annotations

import logging
import os
from typing import Mapping

from ...observability import log_event


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('hello-world-service')
    'HELLO_WORLD_SERVICE'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the service namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, object]:
        """Return a nested mapping containing variables with the supplied *prefix*.

        Keys are stored in lowercase so they line up with
        :class:`~hello_world_service.domain.settings.Settings` field names.

        Examples
        --------
        >>> env = {
        ...     'DEMO_GREETING__EMOJI': 'true',
        ...     'DEMO_HTTP__PORT': '9000',
        ... }
        >>> payload = DefaultEnvLoader(environ=env).load('DEMO')
        >>> payload['http']['port'], payload['greeting']['emoji']
        (9000, True)
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            assign_nested(collected, stripped, _coerce(value))
        log_event("env_variables_loaded", channel="env", level=logging.DEBUG, keys=sorted(collected))
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'HTTP__PORT', 5)
    >>> data
    {'http': {'port': 5}}
    """

    parts = key.split("__")
    cursor = target
    for part in parts[:-1]:
        cursor = _ensure_child_mapping(cursor, part)
    cursor[parts[-1].lower()] = value


def _ensure_child_mapping(mapping: dict[str, object], key: str) -> dict[str, object]:
    """Ensure ``mapping[key]`` is a ``dict``, refusing to replace a scalar."""

    resolved = key.lower()
    child = mapping.setdefault(resolved, {})
    if not isinstance(child, dict):
        raise ValueError(f"Cannot override scalar with mapping for key {key}")
    return child


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('localhost')
    (True, 10, 3.5, 'localhost')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value
