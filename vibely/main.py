"""
Vibely Backend API - Main Application
"""
import logging
import sys
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from vibely import __version__
from vibely.api import create_api_router
from vibely.api.limiter import create_limiter
from vibely.core.config import Settings
from vibely.core.exceptions import AppError
from vibely.core.locks import PairLockRegistry
from vibely.database import Database
from vibely.services.chat_service import ChatService
from vibely.utils.time_utils import to_utc_isoformat, utc_now

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info(f"[STARTUP] Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    try:
        database.init_db()
        logger.info("[OK] Database initialized successfully")
        if not settings.chat_configured:
            logger.warning("Chat provider credentials missing; chat tokens will be unavailable")
    except Exception as e:
        logger.error(f"Failed to initialize backend: {e}")
        raise

    yield  # Application runs here

    logger.info("[SHUTDOWN] Shutting down...")
    database.dispose()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        content = {"message": exc.message}
        if exc.extra.get("missing_fields"):
            content["missingFields"] = exc.extra["missing_fields"]
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit hit on {request.url.path}: {exc.detail}")
        return JSONResponse(status_code=429, content={"message": "Too many requests, please try again later"})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unexpected errors."""
        # Generate a unique error ID for tracking
        error_id = str(uuid.uuid4())[:8]

        # Always log the full error on the server
        logger.error(
            f"[ERROR_ID: {error_id}] Unhandled exception on {request.method} {request.url.path}",
            exc_info=exc
        )

        # Never leak internals to the client
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "errorId": error_id}
        )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    The settings, database, pair lock registry, rate limiter and chat service live on
    ``app.state`` from startup to shutdown and reach handlers through
    ``vibely.core.dependencies``.
    """
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Language exchange backend: profiles, friend requests and chat tokens",
        version=__version__,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        redirect_slashes=False
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.pair_locks = PairLockRegistry()
    app.state.chat_service = ChatService(settings)

    # Initialize rate limiter
    app.state.limiter = create_limiter(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.PROJECT_NAME,
            "version": __version__,
            "status": "running",
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint for monitoring."""
        try:
            with app.state.database.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            database_status = "connected"
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            database_status = "unavailable"

        return {
            "status": "healthy" if database_status == "connected" else "unhealthy",
            "timestamp": to_utc_isoformat(utc_now()),
            "version": __version__,
            "services": {
                "database": {"status": database_status},
                "chat": {"status": "configured" if settings.chat_configured else "not_configured"},
            },
        }

    app.include_router(create_api_router(settings, app.state.limiter), prefix=settings.API_PREFIX)
    return app
