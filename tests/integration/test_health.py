"""Integration tests for the health and root endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "service": "CodeCollab", "version": "1.0.0"}


@pytest.mark.asyncio
async def test_ready_with_database(client: AsyncClient):
    res = await client.get("/ready")

    assert res.status_code == 200
    assert res.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_ready_without_database(client: AsyncClient, db_manager, monkeypatch):
    monkeypatch.setattr(db_manager, "check_connection", AsyncMock(return_value=False))

    res = await client.get("/ready")

    assert res.status_code == 503
    assert res.json()["status"] == "not_ready"


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    res = await client.get("/")

    assert res.status_code == 200
    assert res.json()["name"] == "CodeCollab"
    assert res.json()["status"] == "running"
