from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Minimal user payload returned after login."""
    user_id: UUID
    email: str
    nickname: str

    model_config = ConfigDict(from_attributes=True)


class UserProfile(BaseModel):
    """User schema for API responses (excludes password_hash)."""
    user_id: UUID
    email: str
    nickname: str
    name: Optional[str] = None
    timer_status: str
    timer_idle_threshold_sec: int
    last_active_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Partial profile update; at least one field is required."""
    nickname: Optional[Any] = None
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ContactItem(BaseModel):
    """A contact as sent by the client."""
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ContactResponse(BaseModel):
    """A stored contact."""
    contact_id: Optional[UUID] = None
    user_id: UUID
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ContactsUpdate(BaseModel):
    """Replacement contact list; validated by the route for exact error messages."""
    contacts: Optional[Any] = None


class ContactsResponse(BaseModel):
    contacts: List[ContactResponse]


class PreferencesUpdate(BaseModel):
    timer_status: Optional[Any] = None
    timer_idle_threshold_sec: Optional[Any] = None


class PreferencesResponse(BaseModel):
    timer_status: str
    timer_idle_threshold_sec: int

    model_config = ConfigDict(from_attributes=True)
