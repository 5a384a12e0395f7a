"""
Google OAuth 2.0 client: authorization URL, code exchange and user info.
"""
import logging
import secrets
from typing import Optional, Tuple
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError as PydanticValidationError

from diary_api.core.config import Settings
from diary_api.core.exceptions import ConfigurationError, UpstreamError
from diary_api.schemas.auth import GoogleTokenResponse, GoogleUserInfo

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

OAUTH_SCOPE = "email profile"
DEFAULT_TIMEOUT = 10.0


def generate_state() -> str:
    """Generate an unguessable state string for CSRF protection."""
    return secrets.token_hex(32)


def _error_code(response: httpx.Response) -> str:
    """Extract Google's error code from a failed response, never its full body."""
    try:
        body = response.json()
    except ValueError:
        return "unknown_error"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return "unknown_error"


class GoogleOAuthClient:
    """Client for Google's OAuth 2.0 endpoints."""

    def __init__(self, settings: Settings, timeout: float = DEFAULT_TIMEOUT):
        self.client_id = settings.GOOGLE_CLIENT_ID
        self.client_secret = settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = settings.GOOGLE_REDIRECT_URI
        self.timeout = timeout

    def _require_client(self) -> Tuple[str, str]:
        if not self.client_id:
            raise ConfigurationError("GOOGLE_CLIENT_ID is not configured")
        if not self.redirect_uri:
            raise ConfigurationError("GOOGLE_REDIRECT_URI is not configured")
        return self.client_id, self.redirect_uri

    def build_authorization(self) -> Tuple[str, str]:
        """
        Build the Google authorization URL.

        Returns:
            Tuple of (authorization URL, state embedded in it)

        Raises:
            ConfigurationError: If client ID or redirect URI is not set
        """
        client_id, redirect_uri = self._require_client()
        state = generate_state()

        # access_type=offline and prompt=consent make Google issue a refresh
        # token on every login, including returning users
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPE,
            "state": state,
            "access_type": "offline",
            "prompt": "consent",
        }

        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}", state

    def generate_auth_url(self) -> str:
        """Build the Google authorization URL with a fresh state value."""
        url, _ = self.build_authorization()
        return url

    async def exchange_code_for_token(self, code: str) -> GoogleTokenResponse:
        """
        Exchange an authorization code for Google tokens.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Token response from Google

        Raises:
            ConfigurationError: If client credentials are not set
            UpstreamError: If Google rejects the exchange or is unreachable
        """
        client_id, redirect_uri = self._require_client()
        if not self.client_secret:
            raise ConfigurationError("GOOGLE_CLIENT_SECRET is not configured")

        data = {
            "code": code,
            "client_id": client_id,
            "client_secret": self.client_secret,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.HTTPError as e:
            logger.warning("Google token exchange failed: %s", type(e).__name__)
            raise UpstreamError("Token exchange failed: network error")

        if not 200 <= response.status_code < 300:
            error_code = _error_code(response)
            logger.warning(
                "Google token exchange rejected: status=%d error=%s",
                response.status_code,
                error_code,
            )
            raise UpstreamError(f"Token exchange failed: {error_code}")

        try:
            return GoogleTokenResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            raise UpstreamError("Token exchange failed: invalid response")

    async def get_google_user_info(self, access_token: str) -> GoogleUserInfo:
        """
        Fetch the Google profile for an access token.

        Raises:
            UpstreamError: If the request fails or the profile lacks email/sub
        """
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(GOOGLE_USERINFO_URL, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Google user info request failed: %s", type(e).__name__)
            raise UpstreamError("Failed to get user info: network error")

        if not 200 <= response.status_code < 300:
            error_code = _error_code(response)
            logger.warning(
                "Google user info rejected: status=%d error=%s",
                response.status_code,
                error_code,
            )
            raise UpstreamError(f"Failed to get user info: {error_code}")

        try:
            return GoogleUserInfo.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            raise UpstreamError("Failed to get user info: invalid response")


def verify_state(expected: Optional[str], received: Optional[str]) -> bool:
    """Constant-time comparison of the issued and returned state values."""
    if not expected or not received:
        return False
    return secrets.compare_digest(expected, received)
