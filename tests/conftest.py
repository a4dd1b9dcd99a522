"""Shared test fixtures."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from relay_service.app import create_app
from relay_service.application.dto.principal import Principal
from relay_service.config import Settings
from relay_service.domain.value_objects.enums import Participant
from relay_service.infrastructure.memory.store import InMemoryConversationStore

TOKEN_A = "test-key-a"
TOKEN_B = "test-key-b"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, ms: int) -> None:
        self._now += timedelta(milliseconds=ms)


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryConversationStore:
    return InMemoryConversationStore(clock=clock)


@pytest.fixture
def principal_a() -> Principal:
    return Principal(participant=Participant.A)


@pytest.fixture
def principal_b() -> Principal:
    return Principal(participant=Participant.B)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        RELAY_API_KEYS={TOKEN_A: Participant.A, TOKEN_B: Participant.B},
        READ_STATUS_REQUIRES_AUTH=True,
    )


@pytest.fixture
def app(test_settings, store, clock):
    return create_app(settings=test_settings, store=store, clock=clock)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
