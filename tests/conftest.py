import pytest
from pathlib import Path
from typing import AsyncGenerator, Dict
from httpx import ASGITransport, AsyncClient
from fastapi import FastAPI
from asgi_lifespan import LifespanManager

from lawdesk.core.config import Settings
from lawdesk.main import create_app
from lawdesk.services import Services, build_services
from lawdesk.stores import (
    StoreSet,
    build_local_stores,
    build_memory_stores,
    build_sql_stores,
)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory application."""
    return Settings(
        STORAGE_BACKEND="memory",
        JWT_SECRET="test-secret",
        LOCAL_LATENCY_MS=0,
        ENABLE_RESPONSE_COMPRESSION=False,
        LOG_DIR="",
    )


@pytest.fixture
async def test_app(test_settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Create a test instance of the FastAPI application."""
    app = create_app(test_settings, stores=build_memory_stores())
    async with LifespanManager(app):
        yield app


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def services(test_app: FastAPI) -> Services:
    return test_app.state.services


@pytest.fixture
def test_password() -> str:
    return "test_password123"


@pytest.fixture
def test_user_data(test_password: str) -> Dict[str, str]:
    return {
        "name": "Test User",
        "email": "test@example.com",
        "password": test_password,
    }


@pytest.fixture
def admin_credentials(test_settings: Settings) -> Dict[str, str]:
    return {
        "email": test_settings.DEFAULT_ADMIN_EMAIL,
        "password": test_settings.DEFAULT_ADMIN_PASSWORD,
    }


@pytest.fixture
async def admin_headers(client: AsyncClient, admin_credentials: Dict[str, str]) -> Dict[str, str]:
    response = await client.post("/api/auth/login", json=admin_credentials)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def staff_headers(client: AsyncClient, test_user_data: Dict[str, str]) -> Dict[str, str]:
    response = await client.post("/api/auth/register", json=test_user_data)
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def _sql_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture(params=["memory", "local", "sql"])
async def stores(request, tmp_path: Path) -> AsyncGenerator[StoreSet, None]:
    """The same store contract on every local backend."""
    if request.param == "memory":
        store_set = build_memory_stores()
    elif request.param == "local":
        store_set = build_local_stores(str(tmp_path / "store.json"))
    else:
        store_set = build_sql_stores(Settings(), database_url=_sql_url(tmp_path))
    await store_set.open()
    yield store_set
    await store_set.close()


@pytest.fixture
def backend_services(stores: StoreSet) -> Services:
    """Services over each local backend, without simulated latency."""
    return build_services(Settings(LOCAL_LATENCY_MS=0, INVOICE_DUE_DAYS=14), stores)
