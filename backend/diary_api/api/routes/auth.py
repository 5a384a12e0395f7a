"""
Authentication API routes: signup, login, logout and Google OAuth.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from diary_api.api.cookies import (
    clear_auth_cookie,
    clear_oauth_state_cookie,
    set_auth_cookie,
    set_oauth_state_cookie,
)
from diary_api.api.dependencies.auth import get_oauth_client, get_token_service
from diary_api.core.config import Settings, get_settings
from diary_api.core.constants import AuthCookies, Routes
from diary_api.core.database import get_db
from diary_api.core.exceptions import ConfigurationError, UpstreamError
from diary_api.core.security import TokenService
from diary_api.schemas.auth import LoginRequest, SignupRequest
from diary_api.schemas.user import UserSummary
from diary_api.services.auth_service import AuthService
from diary_api.services.google_oauth import GoogleOAuthClient, verify_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


def _cookie_max_age(token_service: TokenService) -> int:
    return int(token_service.session_lifetime.total_seconds())


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Create a password account and start a session.

    - 400 on the first invalid field
    - 409 if the email is already registered
    """
    user, token = await AuthService(token_service).signup(request, db)

    response = JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"user": {"email": user.email, "nickname": user.nickname}},
    )
    set_auth_cookie(response, token, _cookie_max_age(token_service), settings)
    return response


@router.post("/login")
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Password login; sets the auth-token cookie on success."""
    user, token = await AuthService(token_service).login(request, db)

    response = JSONResponse(
        content={
            "success": True,
            "user": UserSummary.model_validate(user).model_dump(mode="json"),
        }
    )
    set_auth_cookie(response, token, _cookie_max_age(token_service), settings)
    return response


@router.post("/logout")
async def logout(settings: Settings = Depends(get_settings)) -> JSONResponse:
    response = JSONResponse(content={"success": True, "message": "Logged out successfully"})
    clear_auth_cookie(response, settings)
    return response


@router.get("/google")
async def google_login(
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    settings: Settings = Depends(get_settings),
):
    """
    Redirect to Google's consent screen.

    The issued state is bound to the browser with a short-lived cookie and
    checked again in the callback.
    """
    try:
        auth_url, state = oauth_client.build_authorization()
    except ConfigurationError as e:
        logger.error("Google OAuth initiation failed: %s", e.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Google OAuth not configured"},
        )

    response = RedirectResponse(url=auth_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    set_oauth_state_cookie(response, state, settings)
    return response


@router.get("/google/callback")
async def google_callback(
    request: Request,
    code: Optional[str] = Query(None, description="Authorization code from Google"),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    oauth_client: GoogleOAuthClient = Depends(get_oauth_client),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """
    Handle Google's redirect back, create/link the user and start a session.

    Redirects to /diary with the auth-token cookie set.
    """
    expected_state = request.cookies.get(AuthCookies.OAUTH_STATE)

    def fail(status_code: int, message: str) -> JSONResponse:
        response = JSONResponse(status_code=status_code, content={"error": message})
        clear_oauth_state_cookie(response, settings)
        return response

    if error:
        return fail(status.HTTP_400_BAD_REQUEST, "User denied access")

    if not code:
        return fail(status.HTTP_400_BAD_REQUEST, "Authorization code is required")

    if not verify_state(expected_state, state):
        logger.warning("Google OAuth callback with unknown or missing state")
        return fail(status.HTTP_400_BAD_REQUEST, "Invalid OAuth state")

    try:
        user, token = await AuthService(token_service).authenticate_with_google(
            code, oauth_client, db
        )
    except ConfigurationError as e:
        logger.error("Google OAuth callback misconfigured: %s", e.message)
        return fail(status.HTTP_500_INTERNAL_SERVER_ERROR, "Google OAuth not configured")
    except UpstreamError as e:
        logger.warning("Google OAuth callback failed: %s", e.message)
        return fail(status.HTTP_502_BAD_GATEWAY, "Google authentication failed")

    response = RedirectResponse(
        url=str(request.base_url).rstrip("/") + Routes.DIARY,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
    set_auth_cookie(response, token, _cookie_max_age(token_service), settings)
    clear_oauth_state_cookie(response, settings)
    return response
