"""Shared pytest fixtures for bankledger tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from bankledger.accounts.router import get_account_service
from bankledger.accounts.service import AccountService
from bankledger.events.projector import AccountProjector
from bankledger.events.store import EventStore
from bankledger.main import app


@pytest.fixture
def events_dir(tmp_path):
    """Per-test storage root. Not created until the first append."""
    return tmp_path / "events"


@pytest.fixture
def event_store(events_dir):
    """EventStore writing under the per-test storage root."""
    return EventStore(events_dir)


@pytest.fixture
def projector():
    return AccountProjector()


@pytest.fixture
async def client(event_store, projector):
    """Async test client with the per-test store wired into the app."""
    service = AccountService(event_store, projector)
    app.dependency_overrides[get_account_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
