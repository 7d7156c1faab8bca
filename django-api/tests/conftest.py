"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from venue.services.data_layer import DataLayer
from venue.stores.memory_store import InMemoryKeyValueStore

START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; each call advances one second."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current += timedelta(seconds=1)
        return moment


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def layer(backend: InMemoryKeyValueStore, clock: FakeClock) -> DataLayer:
    return DataLayer(backend, clock=clock)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def admin_client(db, api_client: APIClient) -> APIClient:
    response = api_client.post(
        "/api/session",
        {"email": "admin@example.com", "password": "secreto"},
        format="json",
    )
    assert response.status_code == 200
    return api_client
