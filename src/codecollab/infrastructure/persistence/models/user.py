"""SQLAlchemy model for the users table.

Email and username are each globally unique; the unique indexes are what
settles a race between two concurrent registrations.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from codecollab.infrastructure.persistence.database import Base, utc_now


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (UUID string).
        email: Lowercased email address, unique.
        username: Lowercased username, unique.
        password_hash: Argon2 hash. Never serialized.
        first_name: Optional given name.
        last_name: Optional family name.
        avatar: Optional avatar URL.
        bio: Optional free-text profile.
        points: Running point total, changed only through point transactions.
        level: User level.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="User ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    first_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    # Relationships
    snippets: Mapped[list["SnippetModel"]] = relationship(  # noqa: F821
        "SnippetModel",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    point_transactions: Mapped[list["PointTransactionModel"]] = relationship(  # noqa: F821
        "PointTransactionModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    badges: Mapped[list["UserBadgeModel"]] = relationship(  # noqa: F821
        "UserBadgeModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
