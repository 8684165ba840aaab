"""Shared fixtures: in-memory store, stub AI checker, deterministic clock, HTTP client."""

import itertools
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from securepass.database import DatabaseManager, KeyValueStore
from securepass.main import create_app
from securepass.models.enums import PassType, UserRole
from securepass.models.schemas import PassRequest, PlausibilityResult, User
from securepass.services.pass_service import PassLifecycleManager


class StubChecker:
    """Stands in for the AI plausibility service."""

    def __init__(self, reasoning: str = "ok", error: Exception | None = None) -> None:
        self.reasoning = reasoning
        self.error = error
        self.calls: list[tuple[str, PassType]] = []

    async def check(self, purpose: str, pass_type: PassType) -> PlausibilityResult:
        self.calls.append((purpose, pass_type))
        if self.error is not None:
            raise self.error
        return PlausibilityResult(reasoning=self.reasoning)


@pytest.fixture
def store():
    db = DatabaseManager("sqlite://")
    yield KeyValueStore(db)
    db.dispose()


@pytest.fixture
def checker() -> StubChecker:
    return StubChecker()


@pytest.fixture
def clock():
    """Clock that advances one minute per call."""
    start = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def manager(store, checker, clock) -> PassLifecycleManager:
    return PassLifecycleManager(store, checker, clock=clock)


@pytest.fixture
def client(manager) -> TestClient:
    return TestClient(create_app(manager))


@pytest.fixture
def alice() -> User:
    return User(id="user-alice", name="Alice", email="alice@x.com", role=UserRole.VISITOR)


@pytest.fixture
def guard() -> User:
    return User(id="user-guard", name="Gate Guard", email="guard@x.com", role=UserRole.SECURITY)


@pytest.fixture
def delivery_request() -> PassRequest:
    return PassRequest(purpose="delivery", type=PassType.VISITOR, valid_date=date(2026, 3, 3))
