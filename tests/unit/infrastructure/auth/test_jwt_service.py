"""Unit tests for the JWT service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from codecollab.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

SECRET = "unit-test-secret"


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(clock: FakeClock) -> JWTService:
    return JWTService(secret_key=SECRET, issuer="codecollab-api", clock=clock)


class TestCreateToken:
    """Tests for token creation."""

    def test_claims_carry_identity_issuer_and_subject(self, service):
        token = service.create_access_token("user-1", "alice@example.com", "alice")

        payload = service.decode_token(token)

        assert payload["id"] == "user-1"
        assert payload["email"] == "alice@example.com"
        assert payload["username"] == "alice"
        assert payload["iss"] == "codecollab-api"
        assert payload["sub"] == "user-1"

    def test_login_token_expires_after_one_hour(self, service, clock):
        token = service.create_access_token("user-1", "alice@example.com", "alice")
        payload = service.decode_token(token)

        assert payload["exp"] - payload["iat"] == 3600

    def test_refresh_token_uses_seven_day_window(self, service):
        token = service.create_refresh_token("user-1", "alice@example.com", "alice")
        payload = service.decode_token(token)

        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_custom_expiry(self, service):
        token = service.create_access_token(
            "user-1", "a@example.com", "alice", expires_delta=timedelta(minutes=5)
        )
        payload = service.decode_token(token)

        assert payload["exp"] - payload["iat"] == 300


class TestExpiry:
    """Expiry is enforced against the injected clock."""

    def test_accepted_before_expiry(self, service, clock):
        token = service.create_access_token("user-1", "alice@example.com", "alice")

        clock.advance(minutes=59)

        assert service.decode_token(token)["id"] == "user-1"

    def test_rejected_after_expiry(self, service, clock):
        token = service.create_access_token("user-1", "alice@example.com", "alice")

        clock.advance(minutes=61)

        with pytest.raises(TokenExpiredError):
            service.decode_token(token)

    def test_rejected_exactly_at_expiry(self, service, clock):
        token = service.create_access_token("user-1", "alice@example.com", "alice")

        clock.advance(hours=1)

        with pytest.raises(TokenExpiredError):
            service.decode_token(token)


class TestInvalidTokens:
    """Tokens that must be rejected as invalid."""

    def test_tampered_signature(self, service):
        token = service.create_access_token("user-1", "alice@example.com", "alice")
        header, payload, signature = token.split(".")
        forged = "A" if signature[0] != "A" else "B"

        with pytest.raises(InvalidTokenError):
            service.decode_token(f"{header}.{payload}.{forged}{signature[1:]}")

    def test_wrong_secret(self, service, clock):
        other = JWTService(secret_key="another-secret", issuer="codecollab-api", clock=clock)
        token = other.create_access_token("user-1", "alice@example.com", "alice")

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    def test_wrong_issuer(self, service, clock):
        other = JWTService(secret_key=SECRET, issuer="someone-else", clock=clock)
        token = other.create_access_token("user-1", "alice@example.com", "alice")

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    def test_missing_identity_claim(self, service, clock):
        token = jwt.encode(
            {
                "id": "user-1",
                "email": "alice@example.com",
                "iss": "codecollab-api",
                "sub": "user-1",
                "exp": int((clock.now + timedelta(hours=1)).timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    def test_other_algorithm_rejected(self, service, clock):
        token = jwt.encode(
            {
                "id": "user-1",
                "email": "alice@example.com",
                "username": "alice",
                "iss": "codecollab-api",
                "sub": "user-1",
                "exp": int((clock.now + timedelta(hours=1)).timestamp()),
            },
            SECRET,
            algorithm="HS512",
        )

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    @pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer x.y.z"])
    def test_garbage(self, service, garbage):
        with pytest.raises(InvalidTokenError):
            service.decode_token(garbage)


def test_get_expires_in_defaults_to_login_window():
    assert JWTService(secret_key=SECRET).get_expires_in() == 3600
