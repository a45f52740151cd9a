"""Wall-clock adapter implementing :class:`~hello_world_service.application.ports.Clock`."""

from __future__ import annotations

from datetime import datetime, timezone


class SystemClock:
    """Report the current UTC time as ISO-8601 with second precision."""

    def now(self) -> str:
        return datetime.now(timezone.utc).isoformat(timespec="seconds")
