"""Validation of registration and login payloads.

Raw request bodies are checked and normalized here before they reach the
Auth Service, so a malformed request never touches the database.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from codecollab.domain.services.input_validation import parse_input
from codecollab.domain.services.password_validator import default_password_validator

EMAIL_MAX_LENGTH = 255
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
NAME_MAX_LENGTH = 50

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def _normalize_email(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    value = value.strip().lower()
    if not value:
        raise ValueError("Email is required")
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
    return value


class RegistrationInput(BaseModel):
    """Validated registration payload."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str
    username: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        errors = default_password_validator.validate(v)
        if errors:
            raise ValueError(errors[0].message)
        return v

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < USERNAME_MIN_LENGTH:
            raise ValueError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters long"
            )
        if len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must not exceed {USERNAME_MAX_LENGTH} characters")
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username can only contain letters, numbers, underscores, and hyphens"
            )
        return v.lower()

    @field_validator("first_name", "last_name")
    @classmethod
    def trim_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must not exceed {NAME_MAX_LENGTH} characters")
        return v


class LoginInput(BaseModel):
    """Validated login payload.

    The password is only required to be non-empty; strength rules are not
    re-applied because the stored hash decides.
    """

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return _normalize_email(v)


def validate_registration(data: Any) -> RegistrationInput:
    """Validate a registration body.

    Args:
        data: Decoded JSON body.

    Returns:
        RegistrationInput with email and username lowercased and trimmed.

    Raises:
        ValidationError: With one entry per failing field.
    """
    return parse_input(RegistrationInput, data)


def validate_login(data: Any) -> LoginInput:
    """Validate a login body.

    Raises:
        ValidationError: With one entry per failing field.
    """
    return parse_input(LoginInput, data)
