"""Persistence repositories for database operations."""

from codecollab.infrastructure.persistence.repositories.badge_repository import (
    BadgeRepository,
)
from codecollab.infrastructure.persistence.repositories.point_transaction_repository import (
    PointTransactionRepository,
)
from codecollab.infrastructure.persistence.repositories.snippet_repository import (
    SnippetRepository,
)
from codecollab.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "BadgeRepository",
    "PointTransactionRepository",
    "SnippetRepository",
    "UserRepository",
]
