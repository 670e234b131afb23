"""FastAPI dependencies for authentication and service wiring.

Identity is resolved from the ``Authorization: Bearer <token>`` header and
handed to route handlers as an explicit ``CurrentUser`` value. Two modes:

- ``get_current_user`` (required): a missing, malformed, expired or
  tampered token ends the request with 401.
- ``get_optional_user``: any of those yield ``None`` and the request goes on
  anonymously.

Both trust the claims embedded in the token and do not hit the database, so
profile fields may lag until the next profile fetch or refresh.
"""

from dataclasses import dataclass, field
from typing import Annotated, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from codecollab.core.hooks import HookRegistry
from codecollab.core.logging import get_logger
from codecollab.domain.exceptions import AuthError
from codecollab.domain.services.auth_service import AuthService
from codecollab.domain.services.snippet_service import SnippetService
from codecollab.infrastructure.auth import InvalidTokenError, JWTService, TokenExpiredError
from codecollab.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """The identity resolved from a verified token."""

    id: str
    email: str
    username: str
    token: str = field(default="", repr=False)


def get_jwt_service(request: Request) -> JWTService:
    """Get the token codec built by the application factory."""
    return request.app.state.jwt_service


def get_hook_registry(request: Request) -> HookRegistry:
    """Get the hook registry built by the application factory."""
    return request.app.state.hook_registry


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an Authorization header value.

    Raises:
        AuthError: If the header is missing or not ``Bearer <token>``.
    """
    if not authorization:
        raise AuthError("Access token required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthError("Invalid authorization header format")
    return parts[1]


def resolve_user(jwt_service: JWTService, token: str) -> CurrentUser:
    """Verify a token and build the CurrentUser from its claims.

    Raises:
        AuthError: If the token is expired or invalid.
    """
    try:
        payload = jwt_service.decode_token(token)
    except TokenExpiredError as e:
        raise AuthError("Token has expired") from e
    except InvalidTokenError as e:
        raise AuthError("Invalid token") from e

    return CurrentUser(
        id=payload["id"],
        email=payload["email"],
        username=payload["username"],
        token=token,
    )


async def get_current_user(
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        jwt_service: Token codec.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated user's identity.

    Raises:
        AuthError: 401 if token is missing, invalid, or expired.
    """
    try:
        token = extract_bearer_token(authorization)
        return resolve_user(jwt_service, token)
    except AuthError as e:
        logger.info("Authentication failed", reason=e.message)
        raise


async def get_optional_user(
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> Optional[CurrentUser]:
    """Resolve the caller if a valid token is present, else None.

    Never raises for a missing or bad token.
    """
    if not authorization:
        return None
    try:
        token = extract_bearer_token(authorization)
        return resolve_user(jwt_service, token)
    except AuthError as e:
        logger.debug("Ignoring unusable token on optional-auth route", reason=e.message)
        return None


async def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    hook_registry: Annotated[HookRegistry, Depends(get_hook_registry)],
) -> AuthService:
    """Build an AuthService bound to the request's session."""
    return AuthService(session, jwt_service=jwt_service, hook_registry=hook_registry)


async def get_snippet_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SnippetService:
    """Build a SnippetService bound to the request's session."""
    return SnippetService(session)


# Type aliases for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[CurrentUser], Depends(get_optional_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SnippetServiceDep = Annotated[SnippetService, Depends(get_snippet_service)]
