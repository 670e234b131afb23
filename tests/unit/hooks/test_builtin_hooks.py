"""Unit tests for the built-in welcome bonus hook."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.core.hooks import HookEvent, HookRegistry
from codecollab.domain.entities.hook_context import HookContext
from codecollab.domain.services.gamification_service import GamificationService
from codecollab.infrastructure.hooks.builtin_hooks import (
    WELCOME_BONUS_REASON,
    make_welcome_bonus_hook,
    register_builtin_hooks,
)
from codecollab.infrastructure.persistence.models import TransactionType, UserModel
from codecollab.infrastructure.persistence.repositories import UserRepository


@pytest.fixture
async def user(db_session: AsyncSession) -> UserModel:
    user = await UserRepository(db_session).create(
        UserModel(email="dave@example.com", username="dave", password_hash="x")
    )
    await db_session.commit()
    return user


def test_register_builtin_hooks(settings) -> None:
    registry = HookRegistry()

    hook_ids = register_builtin_hooks(registry, settings)

    assert len(hook_ids) == 1
    hook = registry.get_hook_by_id(hook_ids[0])
    assert hook.event == HookEvent.ON_AUTH_AFTER_REGISTER
    assert hook.is_builtin is True
    assert hook.tags == {"name": "welcome_bonus"}
    assert registry.unregister(hook_ids[0]) is False


@pytest.mark.asyncio
async def test_welcome_bonus_awards_points_and_badge(db_session, user) -> None:
    hook = make_welcome_bonus_hook(10, "Community Member")

    await hook(
        HookEvent.ON_AUTH_AFTER_REGISTER,
        {"user_id": user.id},
        HookContext(session=db_session, user_id=user.id),
    )
    await db_session.refresh(user)

    gamification = GamificationService(db_session)
    transactions = await gamification.get_transactions(user.id)
    badges = await gamification.get_badges(user.id)

    assert user.points == 10
    assert [(t.amount, t.type, t.reason) for t in transactions] == [
        (10, TransactionType.BONUS, WELCOME_BONUS_REASON)
    ]
    assert [b.name for b in badges] == ["Community Member"]


@pytest.mark.asyncio
async def test_welcome_bonus_needs_session_and_user() -> None:
    hook = make_welcome_bonus_hook(10, "Community Member")

    with pytest.raises(ValueError):
        await hook(HookEvent.ON_AUTH_AFTER_REGISTER, {}, HookContext())
