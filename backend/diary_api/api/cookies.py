"""
Session cookie writes. Setting and clearing use identical attributes so a
clear always overwrites the cookie set at login.
"""
from starlette.responses import Response

from diary_api.core.config import Settings
from diary_api.core.constants import AuthCookies


def _session_cookie_kwargs(settings: Settings) -> dict:
    return {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


def set_auth_cookie(response: Response, token: str, max_age: int, settings: Settings) -> None:
    """Attach the session token, expiring together with the token's exp."""
    response.set_cookie(
        AuthCookies.SESSION,
        token,
        max_age=max_age,
        **_session_cookie_kwargs(settings),
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    """Expire the session cookie (logout, account deletion, rejected token)."""
    response.set_cookie(
        AuthCookies.SESSION,
        "",
        max_age=0,
        **_session_cookie_kwargs(settings),
    )


def set_oauth_state_cookie(response: Response, state: str, settings: Settings) -> None:
    response.set_cookie(
        AuthCookies.OAUTH_STATE,
        state,
        max_age=settings.OAUTH_STATE_MAX_AGE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path=AuthCookies.OAUTH_STATE_PATH,
    )


def clear_oauth_state_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        AuthCookies.OAUTH_STATE,
        "",
        max_age=0,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path=AuthCookies.OAUTH_STATE_PATH,
    )
