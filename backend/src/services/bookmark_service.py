"""
Service layer for bookmark CRUD operations.

Every lookup filters by both bookmark id and owner id. A bookmark owned by
someone else is reported exactly like one that does not exist.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# bookmarks.id is a 32-bit INTEGER column; larger values can never match a row
MAX_BOOKMARK_ID = 2**31 - 1


async def _get_owned_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    for_update: bool = False,
) -> Bookmark:
    if not 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        raise NotFoundError("Bookmark", bookmark_id)

    query = select(Bookmark).where(
        Bookmark.id == bookmark_id,
        Bookmark.user_id == user_id,
    )
    if for_update:
        # Lock the row so the following write can't race a concurrent delete
        query = query.with_for_update()
    result = await db.execute(query)
    bookmark = result.scalar_one_or_none()
    if bookmark is None:
        logger.debug("Bookmark %s not found for user %s", bookmark_id, user_id)
        raise NotFoundError("Bookmark", bookmark_id)
    return bookmark


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by user_id.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        url=str(data.url),
        description=data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, scoped to user.

    Raises:
        NotFoundError: If the bookmark doesn't exist or belongs to another user.
    """
    return await _get_owned_bookmark(db, user_id, bookmark_id)


async def get_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Get all bookmarks for a user, oldest first (ordered by id)."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id.asc()),
    )
    return list(result.scalars().all())


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Partially update a bookmark. Fields not present in the request are left as they are.

    Raises:
        NotFoundError: If the bookmark doesn't exist or belongs to another user.
            Raised before anything is written.
    """
    bookmark = await _get_owned_bookmark(db, user_id, bookmark_id, for_update=True)

    update_data = data.model_dump(exclude_unset=True)
    if "url" in update_data:
        update_data["url"] = str(update_data["url"])
    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Delete a bookmark.

    Raises:
        NotFoundError: If the bookmark doesn't exist or belongs to another user.
    """
    bookmark = await _get_owned_bookmark(db, user_id, bookmark_id, for_update=True)
    await db.delete(bookmark)
    await db.flush()
