"""SQLAlchemy model for the point_transactions table."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from codecollab.infrastructure.persistence.database import Base, utc_now


class TransactionType(str, enum.Enum):
    """Kind of point movement."""

    EARNED = "EARNED"
    SPENT = "SPENT"
    BONUS = "BONUS"
    PENALTY = "PENALTY"


class PointTransactionModel(Base):
    """One entry in a user's point ledger.

    ``users.points`` is the running sum of these amounts.
    """

    __tablename__ = "point_transactions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, name="transaction_type", native_enum=False, length=20),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="point_transactions",
    )

    def __repr__(self) -> str:
        return f"<PointTransaction(user_id={self.user_id}, amount={self.amount}, type={self.type})>"
