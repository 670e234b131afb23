"""SQLAlchemy models for the CodeCollab tables.

All models inherit from the Base class defined in database.py and are
created on startup when ``auto_create_tables`` is enabled.
"""

from codecollab.infrastructure.persistence.models.badge import BadgeModel, UserBadgeModel
from codecollab.infrastructure.persistence.models.point_transaction import (
    PointTransactionModel,
    TransactionType,
)
from codecollab.infrastructure.persistence.models.snippet import SnippetModel
from codecollab.infrastructure.persistence.models.user import UserModel

__all__ = [
    "BadgeModel",
    "PointTransactionModel",
    "SnippetModel",
    "TransactionType",
    "UserBadgeModel",
    "UserModel",
]
