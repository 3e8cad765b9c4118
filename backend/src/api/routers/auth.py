"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.auth import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    TokenPair,
)
from schemas.user import UserResponse
from services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: AsyncSession = Depends(get_async_session),
) -> SignupResponse:
    """Create an account. Returns the new user without credentials."""
    user = await auth_service.signup(db, data.email, data.password)
    return SignupResponse(user=UserResponse.model_validate(user))


@router.post("/signin", response_model=SigninResponse)
async def signin(
    data: SigninRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> SigninResponse:
    """Sign in with email and password. Returns the user plus access and refresh tokens."""
    result = await auth_service.signin(db, data.email, data.password, settings)
    return SigninResponse(
        user=UserResponse.model_validate(result.user),
        tokens=TokenPair(access=result.tokens.access, refresh=result.tokens.refresh),
    )
