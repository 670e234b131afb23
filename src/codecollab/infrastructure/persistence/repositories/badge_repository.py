"""Badge repository for database operations."""

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.infrastructure.persistence.models import BadgeModel, UserBadgeModel


class BadgeRepository:
    """Repository for badges and the badges users hold."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_name(self, name: str) -> BadgeModel | None:
        """Get a badge by its unique name."""
        result = await self.session.execute(
            select(BadgeModel).where(BadgeModel.name == name)
        )
        return result.scalar_one_or_none()

    async def user_has_badge(self, user_id: str, badge_id: str) -> bool:
        """Check whether a user already holds a badge."""
        result = await self.session.execute(
            select(UserBadgeModel.id)
            .where(
                and_(
                    UserBadgeModel.user_id == user_id,
                    UserBadgeModel.badge_id == badge_id,
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def award(self, user_id: str, badge_id: str) -> UserBadgeModel:
        """Record that a user earned a badge."""
        user_badge = UserBadgeModel(user_id=user_id, badge_id=badge_id)
        self.session.add(user_badge)
        await self.session.flush()
        return user_badge

    async def list_for_user(self, user_id: str) -> list[BadgeModel]:
        """Get the badges a user holds, in the order they were earned."""
        result = await self.session.execute(
            select(BadgeModel)
            .join(UserBadgeModel, UserBadgeModel.badge_id == BadgeModel.id)
            .where(UserBadgeModel.user_id == user_id)
            .order_by(UserBadgeModel.earned_at)
        )
        return list(result.scalars().all())
