"""Shared test helpers: a pinned clock and ready-made service wiring."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI
from fastapi.testclient import TestClient

from hello_world_service.adapters.http.app import create_app
from hello_world_service.application.greeter import GreetingService
from hello_world_service.domain.settings import Settings

FIXED_TIMESTAMP = "2024-05-01T12:00:00+00:00"


@dataclass
class FixedClock:
    """Clock returning a constant timestamp and counting calls."""

    value: str = FIXED_TIMESTAMP
    calls: int = 0

    def now(self) -> str:
        self.calls += 1
        return self.value


def make_service(*, emoji: bool = False, clock: FixedClock | None = None) -> GreetingService:
    return GreetingService(clock or FixedClock(), emoji=emoji)


def make_app(settings: Settings | None = None, *, clock: FixedClock | None = None) -> FastAPI:
    resolved = settings or Settings()
    return create_app(resolved, make_service(emoji=resolved.emoji, clock=clock))


def make_client(settings: Settings | None = None, *, clock: FixedClock | None = None) -> TestClient:
    return TestClient(make_app(settings, clock=clock))
