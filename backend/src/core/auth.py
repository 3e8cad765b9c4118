"""Authentication dependency for bearer access tokens."""
import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import TokenType, decode_token
from db.session import get_async_session
from models.user import User
from services.auth_service import get_user_by_id

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_access_token(token: str, settings: Settings) -> int:
    """
    Validate an access token and return the user id it was issued to.

    Raises:
        HTTPException: 401 if the token is expired, tampered with, or not an access token.
    """
    try:
        payload = decode_token(token, TokenType.ACCESS, settings)
        return int(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except (jwt.InvalidTokenError, ValueError) as e:
        # Log full details for debugging (server-side only)
        logger.warning("Access token validation failed: %s", e)
        raise _unauthorized("Invalid token")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Resolve the authenticated user from the Authorization: Bearer header.

    The token is stateless; the only server-side check beyond signature and
    expiry is that the subject still exists.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user_id = decode_access_token(credentials.credentials, settings)
    user = await get_user_by_id(db, user_id)
    if user is None:
        logger.warning("Access token for unknown user %s", user_id)
        raise _unauthorized("Invalid token")
    return user
