"""Authentication service.

Orchestrates registration, login, profile lookup, token verification and
token refresh on top of the user store.
"""

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from codecollab.core.config import get_settings
from codecollab.core.hooks import HookEvent, HookRegistry
from codecollab.core.logging import get_logger
from codecollab.domain.entities.hook_context import HookContext
from codecollab.domain.exceptions import AuthError, ConflictError, NotFoundError
from codecollab.domain.services.identity_validator import LoginInput, RegistrationInput
from codecollab.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    hash_password,
    needs_rehash,
    verify_password,
)
from codecollab.infrastructure.persistence.models import UserModel
from codecollab.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_TAKEN = "User with this email already exists"
USERNAME_TAKEN = "User with this username already exists"


@dataclass
class AuthResult:
    """A freshly issued token and the user it was issued for."""

    token: str
    user: UserModel
    expires_in: int


class AuthService:
    """Service for authentication business logic."""

    def __init__(
        self,
        session: AsyncSession,
        jwt_service: JWTService | None = None,
        hook_registry: HookRegistry | None = None,
    ) -> None:
        """Initialize the auth service.

        Args:
            session: SQLAlchemy async session.
            jwt_service: Token codec. A default one is built from settings if omitted.
            hook_registry: Registry used to fire post-register/post-login hooks.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.jwt_service = jwt_service or JWTService()
        self.hook_registry = hook_registry

    async def register(self, data: RegistrationInput) -> UserModel:
        """Create a new user.

        The user is committed before the ``on_auth_after_register`` hooks
        run. A failing hook is rolled back and logged but never fails the
        registration.

        Args:
            data: Validated registration input.

        Returns:
            The created user, reloaded so it reflects any welcome bonus.

        Raises:
            ConflictError: If the email or the username is already taken.
        """
        if await self.user_repo.email_exists(data.email):
            raise ConflictError(EMAIL_TAKEN, field="email")
        if await self.user_repo.username_exists(data.username):
            raise ConflictError(USERNAME_TAKEN, field="username")

        password_hash = await run_in_threadpool(hash_password, data.password)

        user = UserModel(
            email=data.email,
            username=data.username,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            points=0,
            level=1,
        )

        try:
            await self.user_repo.create(user)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration; the unique index decides
            await self.session.rollback()
            raise await self._classify_conflict(data) from e

        logger.info("User registered", user_id=user.id, username=user.username)

        if self.hook_registry is not None:
            result = await self.hook_registry.trigger(
                HookEvent.ON_AUTH_AFTER_REGISTER,
                data={"user_id": user.id, "email": user.email, "username": user.username},
                context=HookContext(session=self.session, user_id=user.id),
            )
            if not result.success:
                await self.session.rollback()
                logger.warning(
                    "Post-registration hooks failed",
                    user_id=user.id,
                    errors=result.errors,
                )

        await self.session.refresh(user)
        return user

    async def _classify_conflict(self, data: RegistrationInput) -> ConflictError:
        if await self.user_repo.email_exists(data.email):
            return ConflictError(EMAIL_TAKEN, field="email")
        if await self.user_repo.username_exists(data.username):
            return ConflictError(USERNAME_TAKEN, field="username")
        return ConflictError("User already exists")

    async def login(self, data: LoginInput) -> AuthResult:
        """Check credentials and issue a login token.

        Unknown email and wrong password fail with the same error, and both
        paths run one password verification.

        Args:
            data: Validated login input.

        Returns:
            AuthResult with the token and the user.

        Raises:
            AuthError: If the credentials do not match.
        """
        user = await self.user_repo.get_by_email(data.email)
        if user is None:
            await run_in_threadpool(verify_password, data.password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed", email=data.email, reason="unknown_email")
            raise AuthError(INVALID_CREDENTIALS)

        if not await run_in_threadpool(verify_password, data.password, user.password_hash):
            logger.info("Login failed", user_id=user.id, reason="wrong_password")
            raise AuthError(INVALID_CREDENTIALS)

        if needs_rehash(user.password_hash):
            new_hash = await run_in_threadpool(hash_password, data.password)
            await self.user_repo.update_password_hash(user.id, new_hash)
            await self.session.commit()
            await self.session.refresh(user)
            logger.info("Password hash upgraded", user_id=user.id)

        result = self._issue(user)
        logger.info("User logged in", user_id=user.id)

        if self.hook_registry is not None:
            await self.hook_registry.trigger(
                HookEvent.ON_AUTH_AFTER_LOGIN,
                data={"user_id": user.id},
                context=HookContext(session=self.session, user_id=user.id),
            )

        return result

    async def get_profile(self, user_id: str) -> UserModel:
        """Load a user by ID.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def verify_token(self, token: str) -> UserModel:
        """Decode a token and return the current state of its user.

        Args:
            token: Encoded bearer token.

        Returns:
            The user re-read from the store, not the embedded claims.

        Raises:
            AuthError: If the token is expired or invalid.
            NotFoundError: If the user no longer exists.
        """
        try:
            payload = self.jwt_service.decode_token(token)
        except TokenExpiredError as e:
            raise AuthError("Token has expired") from e
        except InvalidTokenError as e:
            raise AuthError("Invalid token") from e
        return await self.get_profile(payload["id"])

    async def refresh(self, user_id: str) -> AuthResult:
        """Issue a new token with the refresh window for an existing user.

        Raises:
            NotFoundError: If the user no longer exists.
        """
        user = await self.get_profile(user_id)
        expires_delta = timedelta(days=get_settings().refresh_token_expire_days)
        token = self.jwt_service.create_refresh_token(
            user.id, user.email, user.username, expires_delta=expires_delta
        )
        logger.info("Token refreshed", user_id=user.id)
        return AuthResult(
            token=token,
            user=user,
            expires_in=int(expires_delta.total_seconds()),
        )

    def _issue(self, user: UserModel) -> AuthResult:
        return AuthResult(
            token=self.jwt_service.create_access_token(user.id, user.email, user.username),
            user=user,
            expires_in=self.jwt_service.get_expires_in(),
        )
