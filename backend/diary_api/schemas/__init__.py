from diary_api.schemas.auth import (
    GoogleTokenResponse,
    GoogleUserInfo,
    LoginRequest,
    SignupRequest,
    TokenClaims,
)
from diary_api.schemas.diary import (
    DiaryContentRequest,
    DiaryCreateResponse,
    DiaryListItem,
    DiaryListResponse,
    DiaryResponse,
)
from diary_api.schemas.user import (
    ContactItem,
    ContactResponse,
    ContactsResponse,
    ContactsUpdate,
    PreferencesResponse,
    PreferencesUpdate,
    ProfileUpdate,
    UserProfile,
    UserSummary,
)

__all__ = [
    "GoogleTokenResponse",
    "GoogleUserInfo",
    "LoginRequest",
    "SignupRequest",
    "TokenClaims",
    "DiaryContentRequest",
    "DiaryCreateResponse",
    "DiaryListItem",
    "DiaryListResponse",
    "DiaryResponse",
    "ContactItem",
    "ContactResponse",
    "ContactsResponse",
    "ContactsUpdate",
    "PreferencesResponse",
    "PreferencesUpdate",
    "ProfileUpdate",
    "UserProfile",
    "UserSummary",
]
