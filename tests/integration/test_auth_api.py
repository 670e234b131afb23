"""Integration tests for the authentication endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from codecollab.infrastructure.auth import JWTService

REGISTER_URL = "/api/auth/register"
LOGIN_URL = "/api/auth/login"


@pytest.mark.asyncio
async def test_register_returns_user_with_welcome_bonus(client: AsyncClient):
    """Registration answers 201 with the user, bonus already applied."""
    res = await client.post(
        REGISTER_URL,
        json={
            "email": "Alice@Example.com",
            "password": "Passw0rd",
            "username": "Alice",
            "firstName": "Alice",
        },
    )

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    user = body["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert user["username"] == "alice"
    assert user["firstName"] == "Alice"
    assert user["points"] == 10
    assert user["level"] == 1
    assert "password" not in user
    assert "passwordHash" not in user


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, register_user):
    await register_user("alice")

    res = await client.post(
        REGISTER_URL,
        json={"email": "ALICE@example.com", "password": "Passw0rd", "username": "alice2"},
    )

    assert res.status_code == 409
    assert res.json() == {"success": False, "error": "User with this email already exists"}


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, register_user):
    await register_user("alice")

    res = await client.post(
        REGISTER_URL,
        json={"email": "other@example.com", "password": "Passw0rd", "username": "ALICE"},
    )

    assert res.status_code == 409
    assert res.json()["error"] == "User with this username already exists"


@pytest.mark.asyncio
async def test_register_validation_error_lists_fields(client: AsyncClient):
    res = await client.post(
        REGISTER_URL,
        json={"email": "nope", "password": "short", "username": "a"},
    )

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "Validation error"
    assert {d["field"] for d in body["details"]} == {"email", "password", "username"}


@pytest.mark.asyncio
async def test_register_without_body(client: AsyncClient):
    res = await client.post(REGISTER_URL)

    assert res.status_code == 400
    assert res.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_login_flow(client: AsyncClient, register_user):
    """Register, log in, then read the profile with the token."""
    registered = await register_user("bob")

    res = await client.post(LOGIN_URL, json={"email": "BOB@example.com", "password": "Passw0rd"})

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login successful"
    assert body["data"]["expiresIn"] == 3600
    assert body["data"]["user"]["id"] == registered["id"]
    assert "password" not in body["data"]["user"]

    token = body["data"]["token"]
    profile = await client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert profile.status_code == 200
    assert profile.json()["message"] == "Profile retrieved successfully"
    assert profile.json()["data"]["user"]["username"] == "bob"
    assert profile.json()["data"]["user"]["points"] == 10


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email(client: AsyncClient, register_user):
    """Both failures are indistinguishable."""
    await register_user("carol")

    wrong_password = await client.post(
        LOGIN_URL, json={"email": "carol@example.com", "password": "Wrong1234"}
    )
    unknown_email = await client.post(
        LOGIN_URL, json={"email": "ghost@example.com", "password": "Passw0rd"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "error": "Invalid credentials",
    }


@pytest.mark.asyncio
async def test_login_validation_error(client: AsyncClient):
    res = await client.post(LOGIN_URL, json={"email": "carol@example.com"})

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "password"


@pytest.mark.asyncio
async def test_profile_requires_token(client: AsyncClient):
    res = await client.get("/api/auth/profile")

    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"] == "Bearer"
    assert res.json() == {"success": False, "error": "Access token required"}


@pytest.mark.asyncio
async def test_profile_rejects_malformed_header(client: AsyncClient):
    res = await client.get("/api/auth/profile", headers={"Authorization": "Token abc"})

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid authorization header format"


@pytest.mark.asyncio
async def test_profile_rejects_tampered_token(client: AsyncClient, register_user, login_headers):
    await register_user("dave")
    headers = await login_headers("dave@example.com")
    header, payload, signature = headers["Authorization"].removeprefix("Bearer ").split(".")
    forged = "A" if signature[0] != "A" else "B"

    res = await client.get(
        "/api/auth/profile",
        headers={"Authorization": f"Bearer {header}.{payload}.{forged}{signature[1:]}"},
    )

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid token"


@pytest.mark.asyncio
async def test_profile_rejects_expired_token(
    client: AsyncClient, register_user, jwt_service: JWTService
):
    user = await register_user("erin")
    token = jwt_service.create_access_token(
        user["id"], user["email"], user["username"], expires_delta=timedelta(seconds=-5)
    )

    res = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["error"] == "Token has expired"


@pytest.mark.asyncio
async def test_profile_of_deleted_user(client: AsyncClient, jwt_service: JWTService):
    token = jwt_service.create_access_token("no-such-id", "gone@example.com", "gone")

    res = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 404
    assert res.json()["error"] == "User not found"


@pytest.mark.asyncio
async def test_refresh_issues_long_lived_token(
    client: AsyncClient, register_user, login_headers, jwt_service: JWTService
):
    await register_user("frank")
    headers = await login_headers("frank@example.com")

    res = await client.post("/api/auth/refresh", headers=headers)

    assert res.status_code == 200
    data = res.json()["data"]
    assert res.json()["message"] == "Token refreshed successfully"
    assert data["expiresIn"] == 7 * 24 * 3600
    payload = jwt_service.decode_token(data["token"])
    assert payload["username"] == "frank"


@pytest.mark.asyncio
async def test_logout_is_acknowledged(client: AsyncClient, register_user, login_headers):
    await register_user("gina")
    headers = await login_headers("gina@example.com")

    res = await client.post("/api/auth/logout", headers=headers)

    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "Logout successful",
        "data": {"message": "Please remove the token from client storage"},
    }


@pytest.mark.asyncio
async def test_verify_returns_current_user(client: AsyncClient, register_user, login_headers):
    await register_user("hank")
    headers = await login_headers("hank@example.com")

    res = await client.get("/api/auth/verify", headers=headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Token is valid"
    assert res.json()["data"]["user"]["username"] == "hank"


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    res = await client.get("/api/nowhere")

    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Route GET /api/nowhere not found"}


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient):
    res = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert res.headers["X-Correlation-ID"] == "abc-123"
