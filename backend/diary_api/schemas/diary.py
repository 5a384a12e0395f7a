from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class DiaryContentRequest(BaseModel):
    """Body for create/update; content is validated after ownership checks."""
    content: Optional[Any] = None


class DiaryResponse(BaseModel):
    """Owner-facing diary representation."""
    diary_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DiaryListItem(DiaryResponse):
    user_id: UUID


class DiaryListResponse(BaseModel):
    diaries: List[DiaryListItem]
    nextCursor: Optional[str] = None


class DiaryCreateResponse(BaseModel):
    diary_id: UUID
