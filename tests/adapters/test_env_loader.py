"""Environment loader adapter tests clarifying namespace coercion.

The scenarios cover prefix naming, nested assignment, and randomised inputs to
prove the adapter keeps matching the documented ``HELLO_WORLD_SERVICE_*`` rules.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hello_world_service.adapters.env.default import DefaultEnvLoader, assign_nested, default_env_prefix


def test_default_env_prefix() -> None:
    """Slug values should become upper snake-case prefixes."""

    assert default_env_prefix("hello-world-service") == "HELLO_WORLD_SERVICE"


def test_env_loader_nested() -> None:
    """Coerce environment variables into nested dictionaries while ignoring out-of-scope keys."""

    environ = {
        "HELLO_WORLD_SERVICE_HTTP__HOST": "0.0.0.0",
        "HELLO_WORLD_SERVICE_HTTP__PORT": "9000",
        "HELLO_WORLD_SERVICE_GREETING__EMOJI": "true",
        "OTHER": "ignored",
    }
    data = DefaultEnvLoader(environ=environ).load("HELLO_WORLD_SERVICE")
    assert data == {"http": {"host": "0.0.0.0", "port": 9000}, "greeting": {"emoji": True}}


def test_env_loader_empty_environ_is_respected() -> None:
    """An explicitly empty mapping must not fall back to the process environment."""

    assert DefaultEnvLoader(environ={}).load("HELLO_WORLD_SERVICE") == {}


def test_assign_nested_overwrites_scalar_raises() -> None:
    """Protect existing scalar values from being replaced by new nested assignments."""

    container: dict[str, object] = {"a": "value"}
    with pytest.raises(ValueError):
        assign_nested(container, "A__B", 1)


SCALAR_VALUES = st.sampled_from(["0", "1", "true", "false", "3.5", "none", "debug"])
NAMESPACE_KEYS = st.sampled_from(["HTTP__PORT", "HTTP__HOST", "GREETING__EMOJI", "LOG_LEVEL"])


@given(st.dictionaries(NAMESPACE_KEYS, SCALAR_VALUES, max_size=4))
def test_env_loader_handles_random_namespace(entries) -> None:
    """Randomised namespace inputs should map to consistent nested/coerced payloads."""

    prefix = "DEMO"
    environ = {f"{prefix}_" + key: value for key, value in entries.items()}
    environ["IGNORED"] = "1"
    payload = DefaultEnvLoader(environ=environ).load(prefix)

    def _expect(value: str) -> object:
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        if lowered in {"none", "null"}:
            return None
        if lowered.isdigit():
            return int(lowered)
        try:
            return float(value)
        except ValueError:
            return value

    for key, original in entries.items():
        parts = key.lower().split("__")
        node = payload
        for part in parts[:-1]:
            assert part in node
            node = node[part]
        assert node[parts[-1]] == _expect(original)
    assert "ignored" not in payload
