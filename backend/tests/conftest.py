import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports the engine.
_DB_DIR = tempfile.mkdtemp(prefix="scaleadvisor-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-signing-secret-3f9c2a7e5b1d4e8f9a0b6c2d7e1f3a5b"

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from scaleadvisor.main import app
from scaleadvisor.config.database import async_engine, AsyncSessionLocal, Base

PASSWORD = "Sup3r-secret-pass"


@pytest.fixture
async def db():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await async_engine.dispose()


@pytest.fixture
async def db_session(db) -> AsyncGenerator:
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login(client):
    """Register a user through the auth routes and return Bearer headers."""
    async def _login(email: str, name: str = "Test User") -> dict:
        resp = await client.post(
            "/auth/register", json={"email": email, "password": PASSWORD, "name": name}
        )
        assert resp.status_code == 201, resp.text
        resp = await client.post(
            "/auth/jwt/login", data={"username": email, "password": PASSWORD}
        )
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _login


@pytest.fixture
async def auth_headers(login) -> dict:
    return await login("owner@scaleadvisor.io", "Owner")


@pytest.fixture
async def other_headers(login) -> dict:
    return await login("intruder@scaleadvisor.io", "Intruder")


def project_payload(**overrides) -> dict:
    payload = {
        "name": "Shop Front",
        "description": "E-commerce storefront",
        "tech_stack": "mern",
        "current_phase": "startup",
        "target_phase": "growth",
        "current_infra": "Single VM with MongoDB",
        "scaling_goals": ["Handle 10k concurrent users"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_project(client, auth_headers):
    async def _create(headers: dict | None = None, **overrides) -> dict:
        resp = await client.post(
            "/api/projects", json=project_payload(**overrides), headers=headers or auth_headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture
async def project(create_project) -> dict:
    return await create_project()
