"""Endpoints for the authenticated user's own account."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.user import PasswordUpdate, UserResponse, UserUpdate
from services import user_service
from services.exceptions import InvalidCredentialsError, MissingOldPasswordError


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Get the current authenticated user's info."""
    return UserResponse.model_validate(current_user)


@router.patch("", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Edit the current user's profile (email, first name, last name)."""
    user = await user_service.update_user(db, current_user, data)
    return UserResponse.model_validate(user)


@router.patch("/me/password", response_model=UserResponse)
async def update_password(
    data: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """
    Change the current user's password. Requires the current password.

    A missing or wrong old_password is a bad request here (400), not the 403
    used for failed sign-in, since the caller is already authenticated.
    """
    try:
        user = await user_service.update_password(
            db, current_user, data.old_password, data.password,
        )
    except (MissingOldPasswordError, InvalidCredentialsError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return UserResponse.model_validate(user)
