"""Gamification service for points and badges.

Point totals change only through ledger entries: every award inserts a
transaction and bumps ``users.points`` with one atomic UPDATE. Neither step
commits; the caller owns the transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.core.logging import get_logger
from codecollab.infrastructure.persistence.models import (
    BadgeModel,
    PointTransactionModel,
    TransactionType,
)
from codecollab.infrastructure.persistence.repositories import (
    BadgeRepository,
    PointTransactionRepository,
    UserRepository,
)

logger = get_logger(__name__)


class GamificationService:
    """Service for awarding points and badges."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the gamification service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.transaction_repo = PointTransactionRepository(session)
        self.badge_repo = BadgeRepository(session)

    async def award_points(
        self,
        user_id: str,
        amount: int,
        reason: str,
        transaction_type: TransactionType = TransactionType.EARNED,
    ) -> PointTransactionModel:
        """Record a point transaction and apply it to the user's total.

        Args:
            user_id: ID of the user receiving the points.
            amount: Number of points (negative for SPENT/PENALTY).
            reason: Human-readable reason stored on the transaction.
            transaction_type: Kind of transaction.

        Returns:
            The created transaction.
        """
        transaction = await self.transaction_repo.create(
            PointTransactionModel(
                user_id=user_id,
                amount=amount,
                reason=reason,
                type=transaction_type,
            )
        )
        await self.user_repo.increment_points(user_id, amount)

        logger.info(
            "Points awarded",
            user_id=user_id,
            amount=amount,
            transaction_type=transaction_type.value,
        )
        return transaction

    async def award_badge(self, user_id: str, badge_name: str) -> bool:
        """Give a badge to a user unless they already hold it.

        Args:
            user_id: ID of the user.
            badge_name: Unique badge name.

        Returns:
            True if the badge was awarded now, False if it is unknown or
            already held.
        """
        badge = await self.badge_repo.get_by_name(badge_name)
        if badge is None:
            logger.warning("Badge not found", badge_name=badge_name)
            return False

        if await self.badge_repo.user_has_badge(user_id, badge.id):
            return False

        await self.badge_repo.award(user_id, badge.id)
        logger.info("Badge awarded", user_id=user_id, badge_name=badge_name)
        return True

    async def get_badges(self, user_id: str) -> list[BadgeModel]:
        """Get the badges a user holds."""
        return await self.badge_repo.list_for_user(user_id)

    async def get_transactions(self, user_id: str) -> list[PointTransactionModel]:
        """Get a user's point ledger, newest first."""
        return await self.transaction_repo.list_for_user(user_id)
