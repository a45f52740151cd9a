"""Domain-level settings value object.

Purpose
-------
Hold the handful of knobs the adapters need (listen address, route, output
options) in one immutable record. The record is built from a nested mapping
such as the one produced by
:class:`hello_world_service.adapters.env.default.DefaultEnvLoader`.

Contents
--------
* :class:`Settings` – frozen dataclass with defaults for every field.
* :data:`DEFAULT_SETTINGS` – canonical instance used when nothing is configured.

System Role
-----------
The composition root (:mod:`hello_world_service.core`) resolves settings once
and passes them into the HTTP adapter and the CLI. Nothing reads the
environment after that point.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Final

from .errors import InvalidSetting

_LOG_LEVELS: Final[frozenset[str]] = frozenset({"critical", "error", "warning", "info", "debug", "trace"})

# Nested mapping sections -> Settings field names.
_SECTIONS: Final[dict[str, dict[str, str]]] = {
    "http": {
        "host": "host",
        "port": "port",
        "route": "route",
        "base_url": "base_url",
        "timeout": "timeout",
    },
    "greeting": {
        "emoji": "emoji",
        "max_name_length": "max_name_length",
    },
}


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable service configuration.

    Examples
    --------
    >>> Settings.from_mapping({"http": {"port": 9000}}).port
    9000
    >>> Settings().with_overrides(emoji=True).emoji
    True
    """

    host: str = "127.0.0.1"
    port: int = 8000
    route: str = "/ping"
    base_url: str = "http://127.0.0.1:8000"
    timeout: float = 5.0
    emoji: bool = False
    max_name_length: int = 256
    log_level: str = "info"

    def __post_init__(self) -> None:
        _require(isinstance(self.host, str) and bool(self.host), "host must be a non-empty string")
        _require(_is_int(self.port) and 0 < self.port < 65536, f"port must be in 1..65535, got {self.port!r}")
        _require(isinstance(self.route, str) and self.route.startswith("/"), f"route must start with '/', got {self.route!r}")
        _require(isinstance(self.base_url, str) and bool(self.base_url), "base_url must be a non-empty string")
        _require(
            isinstance(self.timeout, (int, float)) and not isinstance(self.timeout, bool) and self.timeout > 0,
            f"timeout must be a positive number, got {self.timeout!r}",
        )
        _require(isinstance(self.emoji, bool), f"emoji must be a boolean, got {self.emoji!r}")
        _require(
            _is_int(self.max_name_length) and self.max_name_length > 0,
            f"max_name_length must be a positive integer, got {self.max_name_length!r}",
        )
        _require(
            isinstance(self.log_level, str) and self.log_level.lower() in _LOG_LEVELS,
            f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}",
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build settings from a nested mapping, ignoring unknown keys.

        ``data`` uses the section layout of the environment loader:
        ``{"http": {...}, "greeting": {...}, "log_level": "debug"}``.
        """

        return cls(**_field_values(data, strict=True))

    @classmethod
    def from_mapping_lenient(cls, data: Mapping[str, Any]) -> tuple[Settings, dict[str, str]]:
        """Build settings keeping every usable value and defaulting the rest.

        Returns the settings and a mapping of rejected field names to the
        validation message, so commands that need only one or two fields keep
        working when an unrelated variable is broken.

        Examples
        --------
        >>> settings, rejected = Settings.from_mapping_lenient(
        ...     {"http": {"port": 99999}, "greeting": {"emoji": True}}
        ... )
        >>> settings.port, settings.emoji, sorted(rejected)
        (8000, True, ['port'])
        """

        accepted: dict[str, Any] = {}
        rejected: dict[str, str] = {}
        for name, value in _field_values(data, strict=False).items():
            try:
                cls(**{name: value})
            except InvalidSetting as exc:
                rejected[name] = str(exc)
                continue
            accepted[name] = value
        return cls(**accepted), rejected

    def with_overrides(self, **changes: Any) -> Settings:
        """Return a copy with ``changes`` applied; ``None`` values are skipped."""

        known = {item.name for item in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise InvalidSetting(f"Unknown settings: {', '.join(sorted(unknown))}")
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def _field_values(data: Mapping[str, Any], *, strict: bool) -> dict[str, Any]:
    """Flatten the sectioned mapping into ``Settings`` keyword arguments.

    A section that is not a mapping raises :class:`InvalidSetting` when
    *strict*, and is skipped otherwise.
    """

    values: dict[str, Any] = {}
    for section, keys in _SECTIONS.items():
        payload = data.get(section)
        if payload is None:
            continue
        if not isinstance(payload, Mapping):
            if strict:
                raise InvalidSetting(f"Section {section!r} must be a mapping, got {payload!r}")
            continue
        for key, field_name in keys.items():
            if key in payload:
                values[field_name] = payload[key]
    if "log_level" in data:
        values["log_level"] = data["log_level"]
    if "timeout" in values and _is_int(values["timeout"]):
        values["timeout"] = float(values["timeout"])
    return values


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidSetting(message)


DEFAULT_SETTINGS: Final[Settings] = Settings()


__all__ = ["DEFAULT_SETTINGS", "Settings"]
