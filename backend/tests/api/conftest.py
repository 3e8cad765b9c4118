"""Shared fixtures for API tests."""
from collections.abc import Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import TokenType, create_token
from models.user import User
from services.auth_service import signup


DEFAULT_PASSWORD = "abCD123!"


@pytest.fixture
def make_auth_headers(settings: Settings) -> Callable[[User], dict[str, str]]:
    """Return a builder for Authorization headers carrying a fresh access token."""

    def _make(user: User) -> dict[str, str]:
        token = create_token(user.id, TokenType.ACCESS, settings, email=user.email)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
async def user(db_session: AsyncSession) -> User:
    """A registered user."""
    return await signup(db_session, "alice@example.com", DEFAULT_PASSWORD)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second registered user, for ownership isolation tests."""
    return await signup(db_session, "bob@example.com", DEFAULT_PASSWORD)


@pytest.fixture
def headers(
    user: User,
    make_auth_headers: Callable[[User], dict[str, str]],
) -> dict[str, str]:
    """Authorization headers for user."""
    return make_auth_headers(user)


@pytest.fixture
def other_headers(
    other_user: User,
    make_auth_headers: Callable[[User], dict[str, str]],
) -> dict[str, str]:
    """Authorization headers for other_user."""
    return make_auth_headers(other_user)
