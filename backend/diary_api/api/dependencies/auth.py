"""
Authentication dependencies for FastAPI routes.
"""
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError as PydanticValidationError

from diary_api.core.config import Settings, get_settings
from diary_api.core.constants import AuthCookies
from diary_api.core.exceptions import VerificationError
from diary_api.core.security import TokenService
from diary_api.schemas.auth import TokenClaims
from diary_api.services.google_oauth import GoogleOAuthClient


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_oauth_client(settings: Settings = Depends(get_settings)) -> GoogleOAuthClient:
    return GoogleOAuthClient(settings)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


async def get_current_user_id(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> UUID:
    """
    Resolve the authenticated user ID from the auth-token cookie.

    Args:
        request: Incoming request
        token_service: Token verifier

    Returns:
        The userId claim as a UUID

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    token = request.cookies.get(AuthCookies.SESSION)
    if not token:
        raise _unauthorized()

    try:
        claims = TokenClaims.model_validate(token_service.verify_token(token))
        return UUID(claims.userId)
    except (VerificationError, PydanticValidationError, ValueError):
        raise _unauthorized()
