"""Pydantic schemas for signup and signin."""
from pydantic import BaseModel, EmailStr, Field

from schemas.user import UserResponse


class SignupRequest(BaseModel):
    """Credentials for creating an account."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=24)


class SigninRequest(BaseModel):
    """Credentials for signing in."""

    email: EmailStr
    password: str = Field(min_length=1)


class TokenPair(BaseModel):
    """Access and refresh tokens issued at sign-in."""

    access: str
    refresh: str


class SignupResponse(BaseModel):
    """Response for a successful signup."""

    user: UserResponse


class SigninResponse(BaseModel):
    """Response for a successful signin."""

    user: UserResponse
    tokens: TokenPair
