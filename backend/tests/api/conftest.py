"""API test fixtures — FastAPI app over ASGITransport with a fake remote repository.

Invariants:
    - get_resolver overridden: the lifespan (real network client) never runs in tests
    - The resolver uses the real fetcher and scheduler over FakeRemote.handler

Design Decisions:
    - Same FakeRemote as the service tests: one fake, two layers of assertions
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from mockapi.api.routes.mock_api import get_resolver
from mockapi.config import Settings
from mockapi.infrastructure.raw_file_client import RawFileFetcher
from mockapi.main import app
from mockapi.services.notification_scheduler import NotificationScheduler
from mockapi.services.resolve_request import MockRequestResolver

from tests.services.fake_remote import FakeRemote


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
async def scheduler(remote):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(remote.handler),
    ) as outbound:
        yield NotificationScheduler(outbound)


@pytest.fixture
async def client(remote, scheduler):
    """FastAPI test client with the resolver dependency overridden."""
    settings = Settings(
        raw_content_host="https://raw.test",
        content_api_host="https://api.test",
        _env_file=None,
    )
    resolver = MockRequestResolver(settings, RawFileFetcher(scheduler.client), scheduler)
    app.dependency_overrides[get_resolver] = lambda: resolver

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
