"""
Diary service: owner-scoped CRUD and cursor pagination.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.core.constants import Pagination
from diary_api.models.diary import Diary


class DiaryServiceError(Exception):
    """Base exception for diary service errors."""
    pass


class DiaryNotFoundError(DiaryServiceError):
    """No diary with that ID (or hidden because it belongs to someone else)."""
    pass


class DiaryForbiddenError(DiaryServiceError):
    """The diary exists but belongs to another user."""
    pass


def parse_limit(raw: Optional[str]) -> int:
    """Clamp a ?limit= value; invalid or non-positive values use the default."""
    if not raw:
        return Pagination.DEFAULT_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        return Pagination.DEFAULT_LIMIT
    if limit <= 0:
        return Pagination.DEFAULT_LIMIT
    return min(limit, Pagination.MAX_LIMIT)


def parse_diary_id(raw: str) -> Optional[UUID]:
    try:
        return UUID(raw)
    except (ValueError, TypeError):
        return None


class DiaryService:
    """Service for diary database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_owned_diary(
        self,
        diary_id: str,
        user_id: UUID,
        hide_foreign: bool = False,
    ) -> Diary:
        """
        Fetch a diary by primary key and check ownership.

        The lookup is by ID only so a foreign diary can be told apart from a
        missing one. With hide_foreign, a foreign diary is reported as missing
        to avoid confirming that it exists.

        Raises:
            DiaryNotFoundError: No such diary (or foreign with hide_foreign)
            DiaryForbiddenError: Diary belongs to another user
        """
        parsed_id = parse_diary_id(diary_id)
        if parsed_id is None:
            raise DiaryNotFoundError("Not found")

        result = await self.db.execute(select(Diary).where(Diary.diary_id == parsed_id))
        diary = result.scalar_one_or_none()

        if diary is None:
            raise DiaryNotFoundError("Not found")

        if diary.user_id != user_id:
            if hide_foreign:
                raise DiaryNotFoundError("Not found")
            raise DiaryForbiddenError("Forbidden")

        return diary

    async def list_diaries(
        self,
        user_id: UUID,
        cursor: Optional[str] = None,
        limit: int = Pagination.DEFAULT_LIMIT,
    ) -> Tuple[List[Diary], Optional[str]]:
        """
        List the user's diaries, newest first.

        Args:
            user_id: Owner
            cursor: diary_id of the last item of the previous page
            limit: Page size

        Returns:
            Tuple of (page items, next cursor or None)
        """
        query = select(Diary).where(Diary.user_id == user_id)

        if cursor and cursor.strip():
            anchor = await self._cursor_anchor(cursor.strip(), user_id)
            if anchor is None:
                return [], None
            query = query.where(
                or_(
                    Diary.created_at < anchor.created_at,
                    and_(
                        Diary.created_at == anchor.created_at,
                        Diary.diary_id < anchor.diary_id,
                    ),
                )
            )

        query = query.order_by(Diary.created_at.desc(), Diary.diary_id.desc()).limit(limit + 1)
        result = await self.db.execute(query)
        diaries = list(result.scalars().all())

        has_more = len(diaries) > limit
        items = diaries[:limit]
        next_cursor = str(items[-1].diary_id) if has_more else None
        return items, next_cursor

    async def _cursor_anchor(self, cursor: str, user_id: UUID) -> Optional[Diary]:
        # A cursor pointing at another user's diary is treated as unknown
        parsed_id = parse_diary_id(cursor)
        if parsed_id is None:
            return None
        result = await self.db.execute(
            select(Diary).where(Diary.diary_id == parsed_id, Diary.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_diary(self, user_id: UUID, content: str) -> Diary:
        diary = Diary(user_id=user_id, content=content)
        self.db.add(diary)
        await self.db.commit()
        await self.db.refresh(diary)
        return diary

    async def update_diary(self, diary: Diary, content: str) -> Diary:
        diary.content = content
        await self.db.commit()
        await self.db.refresh(diary)
        return diary

    async def delete_diary(self, diary: Diary) -> None:
        await self.db.delete(diary)
        await self.db.commit()
