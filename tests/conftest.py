"""
Shared fixtures: an isolated in-memory database per test and a controllable clock.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ALLOWED_ORIGINS", "*")

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Any, Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from stay_with_friends.db.writers.hosts import insert_host  # noqa: E402
from stay_with_friends.db.writers.users import create_user  # noqa: E402
from stay_with_friends.models import (  # noqa: E402, F401
    availabilities,
    booking_requests,
    connections,
    hosts,
    invitations,
    users,
)
from stay_with_friends.models.base import Base, new_id  # noqa: E402


class FixedClock:
    """Clock that only moves when a test moves it."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database with every table created."""
    test_engine = create_engine(
        "sqlite://",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(test_engine)

    yield test_engine

    test_engine.dispose()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 11, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_user(engine: Engine) -> Callable[..., str]:
    """Factory that registers a user and returns the id."""

    def _make_user(email: str, name: str | None = None) -> str:
        user_id = new_id()
        with engine.begin() as conn:
            create_user(conn, user_id, email, name=name)
        return user_id

    return _make_user


@pytest.fixture
def make_host(engine: Engine) -> Callable[..., str]:
    """Factory that creates a host listing and returns the id."""

    def _make_host(owner_id: str, name: str = "Lake House", **details: Any) -> str:
        with engine.begin() as conn:
            return insert_host(conn, owner_id, name, **details)

    return _make_host


@pytest.fixture
def owner_id(make_user: Callable[..., str]) -> str:
    return make_user("owner@example.com", "Olivia Owner")


@pytest.fixture
def guest_id(make_user: Callable[..., str]) -> str:
    return make_user("guest@example.com", "Gus Guest")


@pytest.fixture
def host_id(make_host: Callable[..., str], owner_id: str) -> str:
    return make_host(
        owner_id,
        "Lake House",
        location="Tahoe",
        description="Quiet cabin by the water",
        max_guests=6,
    )


@pytest.fixture
def client(engine: Engine, clock: FixedClock) -> Generator[Any, None, None]:
    """TestClient bound to the test database and clock."""
    from fastapi.testclient import TestClient

    from stay_with_friends.dependencies import get_clock, get_db_engine
    from stay_with_friends.main import app

    app.dependency_overrides[get_db_engine] = lambda: engine
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(user_id: str, email: str) -> dict[str, str]:
    return {"X-User-Id": user_id, "X-User-Email": email}


@pytest.fixture
def as_user() -> Callable[[str, str], dict[str, str]]:
    """Headers the gateway forwards for an authenticated caller."""
    return auth_headers
