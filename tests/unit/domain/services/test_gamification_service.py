"""Unit tests for GamificationService."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.domain.services.gamification_service import GamificationService
from codecollab.infrastructure.persistence.models import TransactionType, UserModel
from codecollab.infrastructure.persistence.repositories import UserRepository


@pytest.fixture
async def user(db_session: AsyncSession) -> UserModel:
    user = await UserRepository(db_session).create(
        UserModel(email="carol@example.com", username="carol", password_hash="x")
    )
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_award_points_records_transaction_and_total(db_session, user):
    service = GamificationService(db_session)

    transaction = await service.award_points(user.id, 25, "Shared a snippet")
    await db_session.commit()
    await db_session.refresh(user)

    assert transaction.type == TransactionType.EARNED
    assert user.points == 25


@pytest.mark.asyncio
async def test_points_total_matches_ledger(db_session, user):
    """The running total always equals the sum of the user's transactions."""
    service = GamificationService(db_session)

    await service.award_points(user.id, 10, "Welcome", TransactionType.BONUS)
    await service.award_points(user.id, 5, "Review")
    await service.award_points(user.id, -3, "Spam", TransactionType.PENALTY)
    await db_session.commit()
    await db_session.refresh(user)

    transactions = await service.get_transactions(user.id)
    assert len(transactions) == 3
    assert user.points == sum(t.amount for t in transactions) == 12


@pytest.mark.asyncio
async def test_award_badge_once(db_session, user):
    service = GamificationService(db_session)

    assert await service.award_badge(user.id, "First Share") is True
    assert await service.award_badge(user.id, "First Share") is False
    await db_session.commit()

    badges = await service.get_badges(user.id)
    assert [b.name for b in badges] == ["First Share"]


@pytest.mark.asyncio
async def test_award_unknown_badge(db_session, user):
    service = GamificationService(db_session)

    assert await service.award_badge(user.id, "Nonexistent") is False
    assert await service.get_badges(user.id) == []
