"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── clock: Deterministic, strictly increasing timestamp source
    ├── memory_store: InMemoryPostStore with a small page size
    ├── read_only_resource: PostResource over NullPostStore, writes disabled
    ├── writable_resource: PostResource over memory_store, writes enabled
    ├── sample_update: A valid PostUpdate payload
    ├── test_client: HTTPX AsyncClient against the default (read-only) app
    └── writable_client: HTTPX AsyncClient against an app with writes enabled
"""

import os
from datetime import datetime, timedelta, timezone

# Environment must be pinned before blog_api.config builds its singleton
os.environ["STORE_BACKEND"] = "none"
os.environ["WRITES_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.config import Settings
from blog_api.schemas.post import PostUpdate
from blog_api.services.memory_store import InMemoryPostStore
from blog_api.services.post_resource import PostResource
from blog_api.services.post_store import NullPostStore


class TickingClock:
    """Returns a timestamp one second later on every call."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def memory_store(clock):
    return InMemoryPostStore(page_size=3, clock=clock)


@pytest.fixture
def read_only_resource():
    return PostResource(store=NullPostStore(), writes_enabled=False)


@pytest.fixture
def writable_resource(memory_store):
    return PostResource(store=memory_store, writes_enabled=True)


@pytest.fixture
def sample_update():
    return PostUpdate(title="Hello", content="First post body", author="Ada")


async def _client_for(app_settings: Settings):
    from blog_api.main import create_app

    app = create_app(app_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the default app: no store, writes disabled.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async for client in _client_for(Settings(store_backend="none", writes_enabled=False)):
        yield client


@pytest_asyncio.fixture
async def writable_client():
    """HTTPX AsyncClient against an app with the memory store and writes enabled."""
    async for client in _client_for(
        Settings(store_backend="memory", writes_enabled=True, page_size=2)
    ):
        yield client
