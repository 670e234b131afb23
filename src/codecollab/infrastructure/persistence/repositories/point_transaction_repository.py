"""Point transaction repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.infrastructure.persistence.models import PointTransactionModel


class PointTransactionRepository:
    """Repository for the point ledger."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, transaction: PointTransactionModel) -> PointTransactionModel:
        """Append a transaction to the ledger."""
        self.session.add(transaction)
        await self.session.flush()
        return transaction

    async def list_for_user(self, user_id: str) -> list[PointTransactionModel]:
        """Get a user's transactions, newest first."""
        result = await self.session.execute(
            select(PointTransactionModel)
            .where(PointTransactionModel.user_id == user_id)
            .order_by(PointTransactionModel.created_at.desc())
        )
        return list(result.scalars().all())
