"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, Field, HttpUrl, field_validator

from schemas.user import camel_case_config


MAX_TITLE_LENGTH = 500


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    # but preserves paths as-is (example.com/page stays example.com/page)
    url: HttpUrl
    description: str | None = None


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    Every field is optional. Fields left out of the request body are not
    touched; title and url may be omitted but not cleared.
    """

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    url: HttpUrl | None = None
    description: str | None = None

    @field_validator("title", "url")
    @classmethod
    def required_fields_not_null(cls, v: object) -> object:
        """Reject explicit nulls for columns that must always have a value."""
        if v is None:
            raise ValueError("field cannot be null")
        return v


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = camel_case_config

    id: int
    user_id: int
    title: str
    url: str
    description: str | None
    created_at: datetime
    updated_at: datetime
