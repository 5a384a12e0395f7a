"""
Diary API routes. Every handler resolves the caller from the session cookie
and checks ownership before touching a diary.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.api.dependencies.auth import get_current_user_id
from diary_api.core.database import get_db
from diary_api.core.validation import is_blank
from diary_api.schemas.diary import (
    DiaryContentRequest,
    DiaryCreateResponse,
    DiaryListItem,
    DiaryListResponse,
    DiaryResponse,
)
from diary_api.services.diary_service import (
    DiaryForbiddenError,
    DiaryNotFoundError,
    DiaryService,
    parse_limit,
)
from diary_api.services.user_service import UserService

router = APIRouter(prefix="/api/diary", tags=["diary"])

CONTENT_REQUIRED = "Content is required and cannot be empty"


def _require_content(payload: DiaryContentRequest) -> str:
    if is_blank(payload.content):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=CONTENT_REQUIRED)
    return payload.content


async def _load_owned(
    service: DiaryService, diary_id: str, user_id: UUID, hide_foreign: bool = False
):
    try:
        return await service.get_owned_diary(diary_id, user_id, hide_foreign=hide_foreign)
    except DiaryNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    except DiaryForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.get("", response_model=DiaryListResponse)
async def list_diaries(
    cursor: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DiaryListResponse:
    """
    List the caller's diaries, newest first.

    - limit defaults to 10, capped at 50
    - nextCursor is null on the last page
    """
    items, next_cursor = await DiaryService(db).list_diaries(
        user_id, cursor=cursor, limit=parse_limit(limit)
    )
    return DiaryListResponse(
        diaries=[DiaryListItem.model_validate(item) for item in items],
        nextCursor=next_cursor,
    )


@router.post("", response_model=DiaryCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_diary(
    payload: DiaryContentRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DiaryCreateResponse:
    content = _require_content(payload)
    diary = await DiaryService(db).create_diary(user_id, content)
    await UserService().touch_last_active(user_id, db)
    return DiaryCreateResponse(diary_id=diary.diary_id)


@router.get("/{diary_id}", response_model=DiaryResponse)
async def get_diary(
    diary_id: str,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DiaryResponse:
    """
    Read one diary.

    A diary owned by someone else is reported as 404, not 403, so its
    existence is not confirmed.
    """
    diary = await _load_owned(DiaryService(db), diary_id, user_id, hide_foreign=True)
    return DiaryResponse.model_validate(diary)


@router.put("/{diary_id}", response_model=DiaryResponse)
async def update_diary(
    diary_id: str,
    payload: DiaryContentRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> DiaryResponse:
    """Replace a diary's content. Ownership is checked before the body."""
    service = DiaryService(db)
    diary = await _load_owned(service, diary_id, user_id)
    content = _require_content(payload)

    diary = await service.update_diary(diary, content)
    await UserService().touch_last_active(user_id, db)
    return DiaryResponse.model_validate(diary)


@router.delete("/{diary_id}")
async def delete_diary(
    diary_id: str,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    service = DiaryService(db)
    diary = await _load_owned(service, diary_id, user_id)
    await service.delete_diary(diary)
    return {"message": "Diary deleted successfully"}
