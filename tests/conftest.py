"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from squadz.api.app import create_app
from squadz.config import Settings
from squadz.containers import AppContainer, build_container
from squadz.services.locations import LocationCache
from squadz.services.sessions import SessionStore
from squadz.services.squads import SquadRegistry


@dataclass
class FakeClock:
    """Manually advanced clock for time-dependent tests."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> SquadRegistry:
    return SquadRegistry(max_members=5, clock=clock)


@pytest.fixture
def session_store(clock: FakeClock) -> SessionStore:
    return SessionStore(clock=clock)


@pytest.fixture
def location_cache(clock: FakeClock) -> LocationCache:
    return LocationCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        dashboard_password="dashboard-secret",
        location_ttl_secs=300,
        max_squad_size=5,
        session_ttl_secs=3600,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
