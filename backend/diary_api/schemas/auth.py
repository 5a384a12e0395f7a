from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenClaims(BaseModel):
    """Identity claims carried by the session token."""
    userId: str
    email: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None

    model_config = ConfigDict(extra="allow")


class SignupRequest(BaseModel):
    """Schema for password signup; fields are checked by AuthService."""
    email: Optional[str] = None
    password: Optional[str] = None
    passwordConfirm: Optional[str] = None
    nickname: Optional[str] = None


class LoginRequest(BaseModel):
    """Schema for password login."""
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleTokenResponse(BaseModel):
    """Token response from Google's token endpoint."""
    access_token: str
    token_type: str
    expires_in: int
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    id_token: Optional[str] = None


class GoogleUserInfo(BaseModel):
    """Schema for Google user information."""
    sub: str  # Google subject ID
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    locale: Optional[str] = None
    verified_email: Optional[bool] = None
