"""Service layer for account creation and sign-in."""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import (
    TokenType,
    create_token,
    dummy_password_hash,
    hash_password_async,
    verify_password_async,
)
from models.user import User
from services.exceptions import DuplicateEmailError, InvalidCredentialsError

logger = logging.getLogger(__name__)


@dataclass
class IssuedTokens:
    """Access and refresh tokens issued together at sign-in."""

    access: str
    refresh: str


@dataclass
class SigninResult:
    """Authenticated user plus freshly issued tokens."""

    user: User
    tokens: IssuedTokens


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by exact (case-sensitive) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Look up a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def signup(db: AsyncSession, email: str, password: str) -> User:
    """
    Create a user with a hashed password.

    The insert runs in a savepoint so a unique violation on email can be
    rolled back without poisoning the request transaction. Any other store
    error propagates unchanged.

    Raises:
        DuplicateEmailError: If the email is already registered.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    password_hash = await hash_password_async(password)

    user = User(email=email, password_hash=password_hash)
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as e:
        raise DuplicateEmailError(email) from e

    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def issue_tokens(user: User, settings: Settings) -> IssuedTokens:
    """Issue an access token and a refresh token for a user."""
    return IssuedTokens(
        access=create_token(user.id, TokenType.ACCESS, settings, email=user.email),
        refresh=create_token(user.id, TokenType.REFRESH, settings),
    )


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """
    Verify an email/password pair.

    Unknown email and wrong password raise the same error.

    Raises:
        InvalidCredentialsError: If the credentials do not match a user.
    """
    user = await get_user_by_email(db, email)
    # Unknown emails still pay for one Argon2 verify so timing doesn't reveal accounts
    password_hash = user.password_hash if user is not None else dummy_password_hash()
    verified = await verify_password_async(password_hash, password)
    if user is None or not verified:
        logger.info("Failed signin attempt for %s", email)
        raise InvalidCredentialsError()
    return user


async def signin(
    db: AsyncSession,
    email: str,
    password: str,
    settings: Settings,
) -> SigninResult:
    """
    Authenticate a user and issue session tokens.

    Nothing is persisted; tokens are stateless.

    Raises:
        InvalidCredentialsError: If the credentials do not match a user.
    """
    user = await authenticate(db, email, password)
    tokens = issue_tokens(user, settings)
    logger.info("Signin: user %s", user.id)
    return SigninResult(user=user, tokens=tokens)
