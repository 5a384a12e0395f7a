"""
Edge authorization middleware.

Every page request is classified by pathname and matched against an ordered
rule table; the first rule that matches decides the response. The decision
is a plain value (status, redirect target, cookie operations) so the routing
logic can be tested without an HTTP server. ``AuthMiddleware`` turns the
decision into actual redirects and Set-Cookie headers.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import urlencode

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from diary_api.api.cookies import clear_auth_cookie
from diary_api.core.config import Settings
from diary_api.core.constants import AuthCookies, Routes
from diary_api.core.exceptions import VerificationError
from diary_api.core.security import TokenService

logger = logging.getLogger(__name__)

TEMPORARY_REDIRECT = 307

PROTECTED_PREFIXES = (Routes.DIARY, Routes.SETTINGS)
AUTH_PAGES = (Routes.LOGIN, Routes.SIGNUP)

# Paths the middleware never sees (API routes, static files, docs)
EXCLUDED_PREFIXES = (
    "/api",
    "/static",
    "/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
)


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"  # no auth-token cookie
    VALID = "valid"
    INVALID = "invalid"  # cookie present but verification failed


class RouteKind(str, Enum):
    LEGACY_LOGIN = "legacy_login"
    LEGACY_DASHBOARD = "legacy_dashboard"
    PROTECTED = "protected"
    AUTH_PAGE = "auth_page"
    PUBLIC = "public"


class CookieAction(str, Enum):
    CLEAR = "clear"


@dataclass(frozen=True)
class CookieOp:
    name: str
    action: CookieAction
    path: str = "/"


CLEAR_SESSION_COOKIE = CookieOp(AuthCookies.SESSION, CookieAction.CLEAR, "/")


@dataclass(frozen=True)
class Decision:
    """Outcome for one request; ``status`` is None for pass-through."""

    status: Optional[int] = None
    redirect_to: Optional[str] = None
    cookie_ops: Tuple[CookieOp, ...] = field(default_factory=tuple)

    @property
    def is_redirect(self) -> bool:
        return self.status is not None


PASS_THROUGH = Decision()


def _is_under(pathname: str, prefix: str) -> bool:
    """True if pathname equals prefix or is nested below it."""
    if prefix == "/":
        return pathname.startswith("/")
    return pathname == prefix or pathname.startswith(prefix + "/")


def is_protected(pathname: str) -> bool:
    return any(pathname.startswith(prefix) for prefix in PROTECTED_PREFIXES)


def is_auth_page(pathname: str) -> bool:
    return any(_is_under(pathname, page) for page in AUTH_PAGES)


def classify_route(pathname: str) -> RouteKind:
    """Map a pathname to exactly one route kind."""
    if _is_under(pathname, Routes.LEGACY_LOGIN):
        return RouteKind.LEGACY_LOGIN
    if pathname.startswith(Routes.LEGACY_DASHBOARD):
        return RouteKind.LEGACY_DASHBOARD
    if is_protected(pathname):
        return RouteKind.PROTECTED
    if is_auth_page(pathname):
        return RouteKind.AUTH_PAGE
    return RouteKind.PUBLIC


def login_url(return_to: Optional[str] = None) -> str:
    if not return_to:
        return Routes.LOGIN
    return f"{Routes.LOGIN}?{urlencode({'redirect': return_to})}"


def redirect(target: str, *cookie_ops: CookieOp) -> Decision:
    return Decision(status=TEMPORARY_REDIRECT, redirect_to=target, cookie_ops=cookie_ops)


def _clear_if_invalid(session: SessionState) -> Tuple[CookieOp, ...]:
    return (CLEAR_SESSION_COOKIE,) if session is SessionState.INVALID else ()


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[str, RouteKind, SessionState], bool]
    decide: Callable[[str, RouteKind, SessionState], Decision]


RULES: Tuple[Rule, ...] = (
    # Checked before any auth rule so /login never enters a login loop
    Rule(
        "legacy-login",
        lambda path, kind, session: kind is RouteKind.LEGACY_LOGIN,
        lambda path, kind, session: redirect(Routes.LOGIN),
    ),
    Rule(
        "dashboard-authenticated",
        lambda path, kind, session: (
            kind is RouteKind.LEGACY_DASHBOARD and session is SessionState.VALID
        ),
        lambda path, kind, session: redirect(Routes.DIARY),
    ),
    Rule(
        "dashboard-unauthenticated",
        lambda path, kind, session: kind is RouteKind.LEGACY_DASHBOARD,
        lambda path, kind, session: redirect(login_url(path), *_clear_if_invalid(session)),
    ),
    Rule(
        "protected-anonymous",
        lambda path, kind, session: (
            kind is RouteKind.PROTECTED and session is SessionState.ANONYMOUS
        ),
        lambda path, kind, session: redirect(login_url(path)),
    ),
    Rule(
        "auth-page-authenticated",
        lambda path, kind, session: (
            kind is RouteKind.AUTH_PAGE and session is SessionState.VALID
        ),
        lambda path, kind, session: redirect(Routes.DIARY),
    ),
    Rule(
        "protected-invalid-token",
        lambda path, kind, session: (
            kind is RouteKind.PROTECTED and session is SessionState.INVALID
        ),
        lambda path, kind, session: redirect(Routes.LOGIN, CLEAR_SESSION_COOKIE),
    ),
    # Public routes never bounce to /auth/login on a stale token
    Rule(
        "public-invalid-token",
        lambda path, kind, session: session is SessionState.INVALID,
        lambda path, kind, session: Decision(cookie_ops=(CLEAR_SESSION_COOKIE,)),
    ),
)


def decide_response(pathname: str, session: SessionState) -> Decision:
    """Evaluate RULES top to bottom; the first match wins."""
    kind = classify_route(pathname)
    for rule in RULES:
        if rule.matches(pathname, kind, session):
            return rule.decide(pathname, kind, session)
    return PASS_THROUGH


def resolve_session(token: Optional[str], token_service: TokenService) -> SessionState:
    """Verify the session cookie, translating failures into INVALID."""
    if not token:
        return SessionState.ANONYMOUS
    try:
        token_service.verify_token(token)
    except VerificationError as e:
        logger.info("Rejected session cookie: %s", e.message)
        return SessionState.INVALID
    return SessionState.VALID


def is_excluded(pathname: str) -> bool:
    return any(_is_under(pathname, prefix) for prefix in EXCLUDED_PREFIXES)


def apply_cookie_ops(response: Response, ops: Tuple[CookieOp, ...], settings: Settings) -> None:
    for op in ops:
        if op.action is CookieAction.CLEAR and op.name == AuthCookies.SESSION:
            clear_auth_cookie(response, settings)


class AuthMiddleware(BaseHTTPMiddleware):
    """Gate page routes on the auth-token cookie."""

    def __init__(self, app: ASGIApp, settings: Settings, token_service: TokenService):
        super().__init__(app)
        self.settings = settings
        self.token_service = token_service

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        pathname = request.url.path
        if is_excluded(pathname):
            return await call_next(request)

        token = request.cookies.get(AuthCookies.SESSION)
        session = resolve_session(token, self.token_service)
        decision = decide_response(pathname, session)

        if decision.is_redirect:
            target = str(request.base_url).rstrip("/") + decision.redirect_to
            logger.debug("Redirecting %s -> %s", pathname, decision.redirect_to)
            response: Response = RedirectResponse(target, status_code=decision.status)
        else:
            response = await call_next(request)

        apply_cookie_ops(response, decision.cookie_ops, self.settings)
        return response
