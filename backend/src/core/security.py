"""
Password hashing and session token signing.

Passwords are hashed with Argon2id (argon2-cffi). The resulting PHC string embeds
the salt and cost parameters, so nothing else needs to be stored alongside it.

Session tokens are HS256 JWTs (PyJWT) carrying the user id in the `sub` claim.
Access and refresh tokens are signed with different secrets and tagged with a
`type` claim, so one kind can never be accepted in place of the other.
"""
import asyncio
import secrets
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from functools import lru_cache

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from core.config import Settings


_password_hasher = PasswordHasher()


class TokenType(StrEnum):
    """Kinds of session token issued at sign-in."""

    ACCESS = "access"
    REFRESH = "refresh"


def hash_password(password: str) -> str:
    """Hash a password with Argon2id (auto-salted, parameters encoded in the result)."""
    return _password_hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never verify."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """
    Argon2id hash of a random throwaway password, built once per process.

    Sign-in verifies against this when the email is unknown, so a missing account
    costs the same Argon2 work as a wrong password.
    """
    return hash_password(secrets.token_urlsafe(16))


async def hash_password_async(password: str) -> str:
    """Hash in a worker thread; Argon2 is deliberately CPU and memory heavy."""
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password_hash: str, password: str) -> bool:
    """Verify in a worker thread."""
    return await asyncio.to_thread(verify_password, password_hash, password)


def _secret_for(token_type: TokenType, settings: Settings) -> str:
    if token_type == TokenType.ACCESS:
        return settings.access_token_secret
    return settings.refresh_token_secret


def _lifetime_for(token_type: TokenType, settings: Settings) -> timedelta:
    if token_type == TokenType.ACCESS:
        return timedelta(minutes=settings.access_token_expire_minutes)
    return timedelta(days=settings.refresh_token_expire_days)


def create_token(
    user_id: int,
    token_type: TokenType,
    settings: Settings,
    email: str | None = None,
    now: datetime | None = None,
) -> str:
    """
    Sign a session token for a user.

    Args:
        user_id: Subject of the token.
        token_type: Selects the signing secret and lifetime.
        settings: Application settings holding secrets and lifetimes.
        email: Embedded in access tokens for display purposes; ignored for refresh tokens.
        now: Issue time. Defaults to the current time.

    Returns:
        The encoded JWT.
    """
    issued_at = now or datetime.now(UTC)
    payload = {
        # PyJWT requires `sub` to be a string
        "sub": str(user_id),
        "type": token_type.value,
        "iat": issued_at,
        "exp": issued_at + _lifetime_for(token_type, settings),
    }
    if token_type == TokenType.ACCESS and email is not None:
        payload["email"] = email
    return jwt.encode(
        payload,
        _secret_for(token_type, settings),
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str, token_type: TokenType, settings: Settings) -> dict:
    """
    Verify a session token and return its claims.

    Raises:
        jwt.ExpiredSignatureError: If the token is past its expiry.
        jwt.InvalidTokenError: If the signature, claims, or token type are wrong.
    """
    payload = jwt.decode(
        token,
        _secret_for(token_type, settings),
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp", "type"]},
    )
    if payload.get("type") != token_type.value:
        raise jwt.InvalidTokenError(f"Expected {token_type.value} token")
    return payload
