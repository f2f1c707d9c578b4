"""
Pytest configuration for the application
"""
import os
from typing import AsyncGenerator, Iterable

import httpx
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI

# Set test environment before the settings singleton is read
os.environ["ENV"] = "test"

from registry.api.deps import get_allowlist  # noqa: E402
from registry.core.config import settings  # noqa: E402
from registry.db.store import RegistryStore  # noqa: E402
from registry.main import create_application  # noqa: E402

settings.ENV = "test"

OWNER = "0x" + "a1" * 20
SUPPORTER_A = "0x" + "b2" * 20
SUPPORTER_B = "0x" + "c3" * 20
OUTSIDER = "0x" + "d4" * 20


class FakeAllowlist:
    """In-memory stand-in for the remote allow-list cache."""

    def __init__(self, addresses: Iterable[str] = ()) -> None:
        self.addresses = {a.lower() for a in addresses}
        self.calls = 0

    async def get(self) -> frozenset:
        self.calls += 1
        return frozenset(self.addresses)


@pytest.fixture
def allowlist() -> FakeAllowlist:
    return FakeAllowlist({OWNER, SUPPORTER_A, SUPPORTER_B})


@pytest_asyncio.fixture
async def test_app(allowlist: FakeAllowlist) -> AsyncGenerator[FastAPI, None]:
    """
    Create a FastAPI test application with a fresh store.
    """
    app = create_application()
    app.dependency_overrides[get_allowlist] = lambda: allowlist
    async with LifespanManager(app):
        yield app


@pytest.fixture
def store(test_app: FastAPI) -> RegistryStore:
    return test_app.state.store


@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an async HTTP client for testing.
    """
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as client:
        yield client


async def create_project(client: httpx.AsyncClient, **fields) -> dict:
    payload = {"name": "Project", "owner": OWNER, **fields}
    response = await client.post("/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def send_signal(
    client: httpx.AsyncClient, project_id: str, address: str, **fields
) -> httpx.Response:
    return await client.post(
        f"/projects/{project_id}/signal", json={"address": address, **fields}
    )
