"""User repository for database operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by normalized email.

        Args:
            email: Lowercased email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered.

        Args:
            email: Email to check.

        Returns:
            True if email exists, False otherwise.
        """
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def username_exists(self, username: str) -> bool:
        """Check if a username is already taken."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def increment_points(self, user_id: str, amount: int) -> None:
        """Add ``amount`` to a user's points in a single UPDATE.

        Args:
            user_id: ID of the user to update.
            amount: Points to add (negative to subtract).
        """
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(points=UserModel.points + amount)
        )

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace a user's stored hash (used after a rehash on login)."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash)
        )
