"""Pydantic schemas for authentication endpoints.

Request bodies are validated by the identity validator, so only response
shapes live here. The user schema has no password field at all.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from codecollab.infrastructure.api.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Public view of a user."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    username: str = Field(..., description="Unique username")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    points: int = Field(..., description="Point total")
    level: int = Field(..., description="User level")
    created_at: datetime
    updated_at: datetime


class UserData(BaseModel):
    """``data`` payload carrying a user."""

    user: UserResponse


class TokenData(CamelModel):
    """``data`` payload carrying a token and its user."""

    token: str = Field(..., description="JWT bearer token")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse


class LogoutData(BaseModel):
    """``data`` payload of the logout response."""

    message: str
