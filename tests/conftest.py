# tests/conftest.py
from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from cinesocial.core.settings import Settings
from cinesocial.main import create_app
from cinesocial.models import User
from cinesocial.schemas import UserCreate
from cinesocial.storage import MemStorage

START = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic clock that moves one second forward on every reading."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def test_settings() -> Settings:
    """Provide settings isolated from the process environment."""
    return Settings()


@pytest.fixture()
def store(test_settings: Settings, clock: FakeClock) -> MemStorage:
    """A fresh store per test."""
    return MemStorage(settings=test_settings, clock=clock)


MakeUsers = Callable[..., Awaitable[list[User]]]


@pytest.fixture()
def make_users(store: MemStorage) -> MakeUsers:
    """Return a helper that registers users by name."""

    async def _make(*names: str) -> list[User]:
        return [
            await store.create_user(
                UserCreate(username=name, email=f"{name}@example.com", password="hashed")
            )
            for name in names
        ]

    return _make


@pytest.fixture()
def client(store: MemStorage) -> Iterator[TestClient]:
    app = create_app(store=store)
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
