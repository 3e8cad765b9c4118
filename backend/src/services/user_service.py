"""Service layer for profile edits and password changes."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import hash_password_async, verify_password_async
from models.user import User
from schemas.user import UserUpdate
from services.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingOldPasswordError,
)

logger = logging.getLogger(__name__)


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile update. Only fields present in the request change.

    Raises:
        DuplicateEmailError: If the new email belongs to another user.
    """
    update_data = data.model_dump(exclude_unset=True)
    try:
        async with db.begin_nested():
            for field, value in update_data.items():
                setattr(user, field, value)
    except IntegrityError as e:
        # email is the only unique column a profile edit can touch
        if "email" not in update_data:
            raise
        raise DuplicateEmailError(update_data["email"]) from e

    await db.refresh(user)
    return user


async def update_password(
    db: AsyncSession,
    user: User,
    old_password: str | None,
    new_password: str,
) -> User:
    """
    Replace a user's password after checking the current one.

    Raises:
        MissingOldPasswordError: If old_password was not supplied.
        InvalidCredentialsError: If old_password does not match the stored hash.
    """
    if not old_password:
        raise MissingOldPasswordError()

    if not await verify_password_async(user.password_hash, old_password):
        raise InvalidCredentialsError()

    user.password_hash = await hash_password_async(new_password)
    await db.flush()
    await db.refresh(user)
    logger.info("Password changed for user %s", user.id)
    return user
