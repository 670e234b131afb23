"""JWT token service.

Issues and verifies the signed bearer tokens that carry a user's identity.
Tokens are stateless: there is no server-side revocation list, so a token
with a valid signature is accepted until it expires. Logging out only means
the client discards its copy.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt

from codecollab.core.config import get_settings

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is malformed or its signature does not verify."""

    pass


class JWTService:
    """Service for creating and validating identity tokens.

    Two windows are used: a short one for tokens issued at login and a
    longer one for tokens issued by the refresh endpoint.
    """

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("id", "email", "username")

    def __init__(
        self,
        secret_key: str | None = None,
        issuer: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
            issuer: Value of the ``iss`` claim. Defaults to the configured issuer.
            clock: Callable returning the current UTC time. Expiry is
                   checked against this clock, which lets tests move time.
        """
        self._secret_key = secret_key
        self._issuer = issuer
        self._clock = clock or utc_now

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens."""
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    @property
    def issuer(self) -> str:
        """Get the issuer label."""
        if self._issuer:
            return self._issuer
        return get_settings().jwt_issuer

    def create_access_token(
        self,
        user_id: str,
        email: str,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a login token.

        Args:
            user_id: The user's unique identifier (also the ``sub`` claim).
            email: The user's email address.
            username: The user's username.
            expires_delta: Custom expiration time. Defaults to the login window.

        Returns:
            Encoded JWT.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
        return self._encode(user_id, email, username, expires_delta)

    def create_refresh_token(
        self,
        user_id: str,
        email: str,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a token with the longer refresh window.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.
            username: The user's username.
            expires_delta: Custom expiration time. Defaults to the refresh window.

        Returns:
            Encoded JWT.
        """
        if expires_delta is None:
            expires_delta = timedelta(days=get_settings().refresh_token_expire_days)
        return self._encode(user_id, email, username, expires_delta)

    def _encode(
        self, user_id: str, email: str, username: str, expires_delta: timedelta
    ) -> str:
        now = self._clock()
        payload = {
            "id": user_id,
            "email": email,
            "username": username,
            "iss": self.issuer,
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        The signature, issuer and claim set are checked by PyJWT; expiry is
        checked against this service's clock.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iss", "sub"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        for claim in self.REQUIRED_CLAIMS:
            if not isinstance(payload.get(claim), str):
                raise InvalidTokenError("Invalid token")

        if not isinstance(payload["exp"], (int, float)):
            raise InvalidTokenError("Invalid token")
        if self._clock().timestamp() >= payload["exp"]:
            raise TokenExpiredError("Token has expired")

        return payload

    def get_expires_in(self, expires_delta: timedelta | None = None) -> int:
        """Get the login token lifetime in seconds."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
        return int(expires_delta.total_seconds())
