"""Pydantic schemas for user endpoints."""
from datetime import datetime

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def _name_or_camel(field_name: str) -> AliasChoices:
    return AliasChoices(field_name, to_camel(field_name))


# Response bodies use camelCase keys. Validation accepts both spellings because
# FastAPI re-validates the serialized response against the response model.
camel_case_config = ConfigDict(
    from_attributes=True,
    alias_generator=AliasGenerator(
        validation_alias=_name_or_camel,
        serialization_alias=to_camel,
    ),
)


class UserResponse(BaseModel):
    """
    Public projection of a user.

    There is intentionally no password_hash field: building this from the ORM
    model is the only way a user leaves the service.
    """

    model_config = camel_case_config

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """Schema for editing the current user's profile. Only provided fields change."""

    email: EmailStr | None = None
    first_name: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=_name_or_camel("first_name"),
    )
    last_name: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=_name_or_camel("last_name"),
    )

    @field_validator("email")
    @classmethod
    def email_not_null(cls, v: str | None) -> str:
        """Email may be omitted but not cleared."""
        if v is None:
            raise ValueError("email cannot be null")
        return v


class PasswordUpdate(BaseModel):
    """
    Schema for changing the current user's password.

    old_password is optional here so that a missing value reaches the service
    and is reported as its own error rather than as a generic validation failure.
    """

    password: str = Field(min_length=8, max_length=24)
    old_password: str | None = Field(default=None, min_length=8, max_length=24)
