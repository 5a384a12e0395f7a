"""
HTML page shells. The client application renders inside them; they exist so
the authorization middleware has real page routes to gate.
"""
from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"], include_in_schema=False)


def _shell(title: str, body: str = "") -> HTMLResponse:
    return HTMLResponse(
        "<!doctype html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title></head>"
        f"<body><div id=\"root\" data-page=\"{escape(title)}\">{body}</div></body></html>"
    )


@router.get("/")
async def home_page():
    return _shell("Diary", '<a href="/auth/login">Log in</a> <a href="/auth/signup">Sign up</a>')


@router.get("/auth/login")
async def login_page():
    return _shell(
        "Log in",
        '<form method="post" action="/api/auth/login"></form>'
        '<a id="google-login" href="/api/auth/google">Continue with Google</a>',
    )


@router.get("/auth/signup")
async def signup_page():
    return _shell("Sign up", '<form method="post" action="/api/auth/signup"></form>')


@router.get("/diary")
async def diary_list_page():
    return _shell("My diary")


@router.get("/diary/new")
async def diary_new_page():
    return _shell("New entry")


@router.get("/diary/{diary_id}")
async def diary_detail_page(diary_id: str):
    return _shell("Entry")


@router.get("/diary/{diary_id}/edit")
async def diary_edit_page(diary_id: str):
    return _shell("Edit entry")


@router.get("/settings")
async def settings_page():
    return _shell("Settings")


@router.get("/settings/{section}")
async def settings_section_page(section: str):
    return _shell("Settings")
