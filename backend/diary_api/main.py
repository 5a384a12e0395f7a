import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from diary_api.api.middleware import AuthMiddleware
from diary_api.api.routes import auth, diary, health, pages, users
from diary_api.core.config import Settings, get_settings
from diary_api.core.exceptions import DiaryAppError
from diary_api.core.logging import configure_logging
from diary_api.core.security import TokenService

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"error": ...} without stack traces."""

    @app.exception_handler(DiaryAppError)
    async def app_error_handler(request: Request, exc: DiaryAppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings = None) -> FastAPI:
    """Build the application with its middleware and routers."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    if settings.uses_default_jwt_secret:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        AuthMiddleware,
        settings=settings,
        token_service=TokenService(settings),
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(diary.router)
    app.include_router(users.router)
    app.include_router(pages.router)

    return app


app = create_app()
