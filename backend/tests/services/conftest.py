"""Service test fixtures — real fetcher and scheduler over a fake remote repository.

Invariants:
    - Every test gets a fresh FakeRemote and its own httpx.AsyncClient
    - Settings built explicitly (no .env): hosts point at raw.test / api.test

Design Decisions:
    - MockTransport over patching RawFileFetcher: the real fetcher, candidate builder and
      scheduler run unchanged
    - resolver uses FakeScheduler: resolver tests only care whether a plan was armed,
      scheduler timing is covered in test_notification_scheduler.py
"""

import httpx
import pytest

from mockapi.config import Settings
from mockapi.infrastructure.raw_file_client import RawFileFetcher, RepositoryLocation
from mockapi.services.notification_scheduler import NotificationScheduler
from mockapi.services.resolve_request import MockRequestResolver

from tests.services.fake_remote import FakeRemote, FakeScheduler


@pytest.fixture
def settings() -> Settings:
    return Settings(
        raw_content_host="https://raw.test",
        content_api_host="https://api.test",
        _env_file=None,
    )


@pytest.fixture
def location() -> RepositoryLocation:
    return RepositoryLocation(owner_id="octo", repo_name="mocks", branch="main")


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
async def http_client(remote):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(remote.handler),
    ) as client:
        yield client


@pytest.fixture
def fetcher(http_client) -> RawFileFetcher:
    return RawFileFetcher(http_client)


@pytest.fixture
def scheduler(http_client) -> NotificationScheduler:
    return NotificationScheduler(http_client)


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def resolver(settings, fetcher, fake_scheduler) -> MockRequestResolver:
    return MockRequestResolver(settings, fetcher, fake_scheduler)
