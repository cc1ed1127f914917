"""API test fixtures: isolated app per test with an in-memory store.

Invariants:
    - Every test gets a fresh app, store and rate limiter
    - No Firebase app is created (store injected, lifespan not run by ASGITransport)

Design Decisions:
    - create_app over dependency_overrides: the store lives on app.state, so
      injecting it at construction covers routes and health alike
"""

import pytest
from httpx import ASGITransport, AsyncClient

from jsonspark.main import create_app

from tests.api.fakes import InMemoryStore, make_settings


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_widgets(client):
    """Create the 'widgets' document through the API."""
    res = await client.post("/api/create", json={
        "name": "Widgets", "jsonData": '{"a": 1}', "slug": "widgets",
    })
    assert res.status_code == 201
    return res
