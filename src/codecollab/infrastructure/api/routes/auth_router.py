"""Authentication API routes.

Provides endpoints for registration, login, and token management.

Tokens are not tracked server-side: logout only tells the client to drop
its token, and a leaked token stays valid until it expires.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from codecollab.core.logging import get_logger
from codecollab.domain.services.auth_service import AuthResult
from codecollab.domain.services.identity_validator import (
    validate_login,
    validate_registration,
)
from codecollab.infrastructure.api.dependencies import AuthenticatedUser, AuthServiceDep
from codecollab.infrastructure.api.schemas import (
    ErrorResponse,
    LogoutData,
    SuccessResponse,
    TokenData,
    UserData,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def _token_response(message: str, result: AuthResult) -> SuccessResponse[TokenData]:
    return SuccessResponse[TokenData](
        message=message,
        data=TokenData(
            token=result.token,
            expires_in=result.expires_in,
            user=UserResponse.model_validate(result.user),
        ),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[UserData],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email or username already exists"},
    },
)
async def register(
    auth_service: AuthServiceDep,
    payload: Annotated[Any, Body()] = None,
) -> SuccessResponse[UserData]:
    """Register a new user.

    The body is validated before any database access. The returned user
    already includes the welcome bonus when it was granted.
    """
    data = validate_registration(payload)
    user = await auth_service.register(data)
    return SuccessResponse[UserData](
        message="User registered successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post(
    "/login",
    response_model=SuccessResponse[TokenData],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    auth_service: AuthServiceDep,
    payload: Annotated[Any, Body()] = None,
) -> SuccessResponse[TokenData]:
    """Authenticate with email and password and receive a bearer token."""
    data = validate_login(payload)
    result = await auth_service.login(data)
    return _token_response("Login successful", result)


@router.get(
    "/profile",
    response_model=SuccessResponse[UserData],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_profile(
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
) -> SuccessResponse[UserData]:
    """Return the caller's profile, read fresh from the database."""
    user = await auth_service.get_profile(current_user.id)
    return SuccessResponse[UserData](
        message="Profile retrieved successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post(
    "/refresh",
    response_model=SuccessResponse[TokenData],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def refresh_token(
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
) -> SuccessResponse[TokenData]:
    """Issue a new token with the longer refresh window.

    The presented token is not revoked and remains valid until it expires.
    """
    result = await auth_service.refresh(current_user.id)
    return _token_response("Token refreshed successfully", result)


@router.post(
    "/logout",
    response_model=SuccessResponse[LogoutData],
    responses={401: {"model": ErrorResponse}},
)
async def logout(current_user: AuthenticatedUser) -> SuccessResponse[LogoutData]:
    """Acknowledge a logout. The client must discard its token."""
    logger.info("User logged out", user_id=current_user.id)
    return SuccessResponse[LogoutData](
        message="Logout successful",
        data=LogoutData(message="Please remove the token from client storage"),
    )


@router.get(
    "/verify",
    response_model=SuccessResponse[UserData],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def verify(
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
) -> SuccessResponse[UserData]:
    """Check a token and return the current state of its user."""
    user = await auth_service.verify_token(current_user.token)
    return SuccessResponse[UserData](
        message="Token is valid",
        data=UserData(user=UserResponse.model_validate(user)),
    )
