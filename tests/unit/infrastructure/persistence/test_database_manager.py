"""Unit tests for DatabaseManager."""

import pytest
from sqlalchemy import inspect, select

from codecollab.infrastructure.persistence.database import DEFAULT_BADGES, DatabaseManager
from codecollab.infrastructure.persistence.models import BadgeModel


async def _table_names(db: DatabaseManager) -> set[str]:
    async with db.engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


@pytest.mark.asyncio
async def test_seed_default_badges_is_idempotent(db_manager: DatabaseManager):
    """The fixture already seeded once; seeding again adds nothing."""
    assert await db_manager.seed_default_badges() == 0

    async with db_manager.session() as session:
        names = (await session.execute(select(BadgeModel.name))).scalars().all()

    assert sorted(names) == sorted(b["name"] for b in DEFAULT_BADGES)


@pytest.mark.asyncio
async def test_create_and_drop_tables(settings):
    db = DatabaseManager(settings)
    try:
        await db.create_tables()
        assert {"users", "snippets", "point_transactions", "badges", "user_badges"} <= (
            await _table_names(db)
        )

        await db.drop_tables()
        assert await _table_names(db) == set()
    finally:
        await db.disconnect()


@pytest.mark.asyncio
async def test_check_connection(db_manager: DatabaseManager):
    assert await db_manager.check_connection() is True
