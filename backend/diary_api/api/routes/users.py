"""
Account and settings API routes.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.api.cookies import clear_auth_cookie
from diary_api.api.dependencies.auth import get_current_user_id
from diary_api.core.config import Settings, get_settings
from diary_api.core.constants import TimerStatus, VALID_IDLE_THRESHOLDS
from diary_api.core.database import get_db
from diary_api.core.validation import is_blank, is_valid_optional_email
from diary_api.models.user import User
from diary_api.schemas.user import (
    ContactItem,
    ContactResponse,
    ContactsResponse,
    ContactsUpdate,
    PreferencesResponse,
    PreferencesUpdate,
    ProfileUpdate,
    UserProfile,
)
from diary_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["users"])

TIMER_STATUS_INPUT = {
    "ACTIVE": TimerStatus.ACTIVE,
    "PAUSED": TimerStatus.PAUSED,
    "INACTIVE": TimerStatus.INACTIVE,
}


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


async def _load_user(user_id: UUID, db: AsyncSession) -> User:
    user = await UserService().get_user_by_id(user_id, db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.delete("")
async def delete_account(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Delete the caller's account and everything they own, then end the session."""
    deleted = await UserService().delete_user(user_id, db)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info("Account deleted: %s", user_id)
    response = JSONResponse(content={"success": True, "message": "Account deleted successfully"})
    clear_auth_cookie(response, settings)
    return response


@router.get("/profile")
async def get_profile(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await _load_user(user_id, db)
    return {"user": UserProfile.model_validate(user)}


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Update nickname and/or name.

    - At least one field is required
    - nickname cannot be blank
    """
    provided = payload.model_fields_set & {"nickname", "name"}
    if not provided:
        raise _bad_request("At least one field (nickname or name) must be provided")

    if "nickname" in provided and is_blank(payload.nickname):
        raise _bad_request("Nickname cannot be empty")

    user = await _load_user(user_id, db)
    fields = {key: getattr(payload, key) for key in provided}
    user = await UserService().update_profile(user, fields, db)
    return {"user": UserProfile.model_validate(user)}


@router.get("/contacts", response_model=ContactsResponse)
async def get_contacts(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> ContactsResponse:
    contacts = await UserService().list_contacts(user_id, db)
    return ContactsResponse(contacts=[ContactResponse.model_validate(c) for c in contacts])


@router.put("/contacts", response_model=ContactsResponse)
async def replace_contacts(
    payload: ContactsUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> ContactsResponse:
    """Replace the caller's contact list wholesale."""
    if "contacts" not in payload.model_fields_set:
        raise _bad_request("contacts field is required")

    if not isinstance(payload.contacts, list):
        raise _bad_request("contacts must be an array")

    items = []
    for raw in payload.contacts:
        if not isinstance(raw, dict):
            raise _bad_request("Each contact must be an object")
        try:
            item = ContactItem.model_validate(raw)
        except PydanticValidationError:
            raise _bad_request("Invalid contact")
        if not is_valid_optional_email(item.email):
            raise _bad_request(f"Invalid email format: {item.email}")
        items.append(item.model_dump())

    await _load_user(user_id, db)
    contacts = await UserService().replace_contacts(user_id, items, db)
    return ContactsResponse(contacts=[ContactResponse.model_validate(c) for c in contacts])


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> PreferencesResponse:
    user = await _load_user(user_id, db)
    return PreferencesResponse.model_validate(user)


@router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    payload: PreferencesUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> PreferencesResponse:
    """
    Update the inactivity timer.

    timer_status is one of PAUSED, ACTIVE, INACTIVE (stored lowercase);
    timer_idle_threshold_sec must be 30, 60, 90 or 180 days in seconds.
    """
    timer_status = payload.timer_status
    threshold = payload.timer_idle_threshold_sec

    if timer_status is None and threshold is None:
        raise _bad_request(
            "At least one field (timer_status or timer_idle_threshold_sec) must be provided"
        )

    if timer_status is not None and (
        not isinstance(timer_status, str) or timer_status not in TIMER_STATUS_INPUT
    ):
        raise _bad_request("Invalid timer_status. Must be PAUSED, ACTIVE, or INACTIVE")

    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise _bad_request("timer_idle_threshold_sec must be a number")
        if threshold not in VALID_IDLE_THRESHOLDS:
            raise _bad_request(
                "Invalid timer_idle_threshold_sec. Must be one of: "
                + ", ".join(str(v) for v in VALID_IDLE_THRESHOLDS)
            )

    user = await _load_user(user_id, db)
    user = await UserService().update_preferences(
        user,
        db,
        timer_status=TIMER_STATUS_INPUT.get(timer_status) if timer_status is not None else None,
        timer_idle_threshold_sec=int(threshold) if threshold is not None else None,
    )
    return PreferencesResponse.model_validate(user)
