"""Pytest configuration for all tests."""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.core.config import Settings
from codecollab.infrastructure.api.app import create_app
from codecollab.infrastructure.auth import JWTService
from codecollab.infrastructure.persistence.database import DatabaseManager

TEST_SECRET_KEY = "test-secret-key-for-codecollab-tests"
DEFAULT_PASSWORD = "Passw0rd"


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key=TEST_SECRET_KEY,
        log_level="WARNING",
    )


@pytest.fixture
def jwt_service(settings: Settings) -> JWTService:
    """Token codec signing with the test secret."""
    return JWTService(secret_key=settings.secret_key, issuer=settings.jwt_issuer)


@pytest_asyncio.fixture
async def db_manager(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """A fresh in-memory database with tables and default badges."""
    db = DatabaseManager(settings)
    await db.create_tables()
    await db.seed_default_badges()
    yield db
    await db.drop_tables()
    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_manager.session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(settings: Settings, db_manager: DatabaseManager) -> FastAPI:
    """Application wired to the test database."""
    return create_app(settings=settings, db_manager=db_manager)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


RegisterUser = Callable[..., Awaitable[dict]]
LoginUser = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register a user through the API and return the user object."""

    async def _register(
        username: str,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        **extra: str,
    ) -> dict:
        payload = {
            "email": email or f"{username}@example.com",
            "password": password,
            "username": username,
            **extra,
        }
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]["user"]

    return _register


@pytest.fixture
def login_headers(client: AsyncClient) -> LoginUser:
    """Log a user in and return the Authorization header for their token."""

    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _login
