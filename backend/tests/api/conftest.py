"""API test fixtures — ASGI client wired to the per-test Store."""

import pytest
from httpx import ASGITransport, AsyncClient

from lexicology.main import app


@pytest.fixture
async def client(store):
    """FastAPI test client; the lifespan is bypassed, so the Store is attached here."""
    app.state.store = store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.store = None


@pytest.fixture
async def signed_up(client):
    """Sign up a user over HTTP and return the user payload."""
    async def _signup(first_name="Ann", email=None, categories=None):
        res = await client.post("/api/v1/users/signup", json={
            "firstName": first_name,
            "lastName": "Lee",
            "birthDate": "1990-01-01",
            "email": email,
            "categories": categories or [],
        })
        assert res.status_code == 201, res.text
        return res.json()["user"]
    return _signup
