"""Tests for the current-user endpoints."""
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import TokenType, create_token
from models.user import User
from services.auth_service import signup


DEFAULT_PASSWORD = "abCD123!"


# =============================================================================
# GET /users/me
# =============================================================================


async def test_get_me_returns_current_user(
    client: AsyncClient,
    user: User,
    headers: dict[str, str],
) -> None:
    """A valid access token resolves to its user."""
    response = await client.get("/users/me", headers=headers)
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == user.id
    assert data["email"] == "alice@example.com"
    assert data["firstName"] is None
    assert data["lastName"] is None
    assert "passwordHash" not in data
    assert "password_hash" not in data


async def test_get_me_without_token_returns_401(client: AsyncClient) -> None:
    """Guarded routes require a bearer token."""
    response = await client.get("/users/me")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_get_me_with_invalid_token_returns_401(client: AsyncClient) -> None:
    """A token that isn't a valid JWT is rejected."""
    response = await client.get("/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


async def test_get_me_with_expired_token_returns_401(
    client: AsyncClient,
    user: User,
    settings: Settings,
) -> None:
    """An access token older than its lifetime is rejected."""
    issued = datetime.now(UTC) - timedelta(minutes=settings.access_token_expire_minutes + 1)
    token = create_token(user.id, TokenType.ACCESS, settings, now=issued)

    response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


async def test_get_me_with_refresh_token_returns_401(
    client: AsyncClient,
    user: User,
    settings: Settings,
) -> None:
    """Refresh tokens can't be used as access tokens."""
    token = create_token(user.id, TokenType.REFRESH, settings)

    response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_get_me_for_unknown_subject_returns_401(
    client: AsyncClient,
    user: User,
    settings: Settings,
) -> None:
    """A validly signed token whose user doesn't exist is rejected."""
    token = create_token(user.id + 1000, TokenType.ACCESS, settings)

    response = await client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


# =============================================================================
# PATCH /users
# =============================================================================


async def test_update_me_changes_profile_fields(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """Profile fields are editable and returned in camelCase."""
    response = await client.patch(
        "/users",
        json={"firstName": "Alice", "lastName": "Liddell"},
        headers=headers,
    )
    assert response.status_code == 200

    data = response.json()
    assert data["firstName"] == "Alice"
    assert data["lastName"] == "Liddell"
    assert data["email"] == "alice@example.com"


async def test_update_me_partial_update(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """Fields missing from the body keep their previous values."""
    await client.patch(
        "/users", json={"firstName": "Alice", "lastName": "Liddell"}, headers=headers,
    )

    response = await client.patch("/users", json={"lastName": "Smith"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["firstName"] == "Alice"
    assert response.json()["lastName"] == "Smith"


async def test_update_me_email_taken_returns_403(
    client: AsyncClient,
    headers: dict[str, str],
    other_user: User,
) -> None:
    """Switching to another user's email is rejected like a duplicate signup."""
    response = await client.patch(
        "/users", json={"email": other_user.email}, headers=headers,
    )
    assert response.status_code == 403


async def test_update_me_invalid_email_returns_400(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """Emails are validated."""
    response = await client.patch("/users", json={"email": "nope"}, headers=headers)
    assert response.status_code == 400


async def test_update_me_null_email_returns_400(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """Email can't be cleared."""
    response = await client.patch("/users", json={"email": None}, headers=headers)
    assert response.status_code == 400


async def test_update_me_requires_auth(client: AsyncClient) -> None:
    """Unauthenticated profile edits are rejected."""
    response = await client.patch("/users", json={"firstName": "Eve"})
    assert response.status_code == 401


# =============================================================================
# PATCH /users/me/password
# =============================================================================


async def test_update_password_then_signin_with_new_password(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """After a password change only the new password signs in."""
    response = await client.patch(
        "/users/me/password",
        json={"password": "newPass456!", "old_password": DEFAULT_PASSWORD},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"

    new_signin = await client.post(
        "/auth/signin", json={"email": "alice@example.com", "password": "newPass456!"},
    )
    old_signin = await client.post(
        "/auth/signin", json={"email": "alice@example.com", "password": DEFAULT_PASSWORD},
    )
    assert new_signin.status_code == 200
    assert old_signin.status_code == 403


async def test_update_password_wrong_old_password_returns_400(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """A wrong old password is a bad request."""
    response = await client.patch(
        "/users/me/password",
        json={"password": "newPass456!", "old_password": "wrongPass1!"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid credentials"


async def test_update_password_missing_old_password_returns_400(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """Omitting old_password is a bad request with its own message."""
    response = await client.patch(
        "/users/me/password",
        json={"password": "newPass456!"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "old_password is required"


async def test_update_password_short_new_password_returns_400(
    client: AsyncClient,
    headers: dict[str, str],
) -> None:
    """New passwords follow the same 8-24 length rule as signup."""
    response = await client.patch(
        "/users/me/password",
        json={"password": "short", "old_password": DEFAULT_PASSWORD},
        headers=headers,
    )
    assert response.status_code == 400


async def test_update_password_only_affects_current_user(
    client: AsyncClient,
    db_session: AsyncSession,
    make_auth_headers: Callable[[User], dict[str, str]],
) -> None:
    """Changing one user's password leaves other accounts alone."""
    alice = await signup(db_session, "alice@example.com", DEFAULT_PASSWORD)
    await signup(db_session, "bob@example.com", DEFAULT_PASSWORD)

    response = await client.patch(
        "/users/me/password",
        json={"password": "newPass456!", "old_password": DEFAULT_PASSWORD},
        headers=make_auth_headers(alice),
    )
    assert response.status_code == 200

    bob_signin = await client.post(
        "/auth/signin", json={"email": "bob@example.com", "password": DEFAULT_PASSWORD},
    )
    assert bob_signin.status_code == 200
