from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from realty_api.core.config import Settings, get_settings
from realty_api.core.errors import ApiError, AuthError, NotFoundError, StorageError, public_message
from realty_api.core.rate_limiter import RateLimiter
from realty_api.core.utils import configure_logging
from realty_api.domain.collections import CONTENT_COLLECTIONS
from realty_api.repositories import build_backend
from realty_api.repositories.json_storage import JsonFileBackend
from realty_api.routers import auth as auth_router
from realty_api.routers import public as public_router
from realty_api.routers import seed as seed_router
from realty_api.routers import uploads as uploads_router
from realty_api.routers.collections import build_collection_router
from realty_api.services.auth_service import AuthService
from realty_api.services.backup_service import BackupScheduler, BackupService
from realty_api.services.content_service import ContentService
from realty_api.services.upload_service import UPLOADS_URL_PREFIX, UploadService

logger = logging.getLogger(__name__)

DEV_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _allowed_origins(settings: Settings) -> list[str]:
    allowed = {settings.public_base_url, *settings.cors_origins}
    if settings.app_env != "prod":
        allowed.update(DEV_ORIGINS)
    return sorted(origin for origin in allowed if origin)


def _error_response(status_code: int, message: str, *, headers: dict | None = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError):
        if isinstance(exc, StorageError):
            logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return _error_response(exc.status_code, public_message(exc), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = NotFoundError.code if exc.status_code == 404 else str(exc.detail)
        return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return _error_response(400, "invalid request")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, ApiError.code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a fully wired application; services live on ``app.state``."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    backend = build_backend(settings)
    backup = None
    scheduler = None
    if isinstance(backend, JsonFileBackend):
        backup = BackupService(backend, settings.backup_dir, retention=settings.backup_retention)
        scheduler = BackupScheduler(backup, settings.backup_interval_seconds)
    auth_service = AuthService(backend, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if backup and settings.restore_on_startup:
            backup.restore_latest()
        backend.initialize()
        auth_service.seed_admin()
        if backup and settings.backup_on_write:
            backend.on_write = backup.after_write
        if scheduler:
            scheduler.start()
        try:
            yield
        finally:
            if scheduler:
                scheduler.stop()
            if backup:
                backup.snapshot_quietly("shutdown")
            backend.close()

    app = FastAPI(title="Realty Site API", lifespan=lifespan)
    app.state.settings = settings
    app.state.backend = backend
    app.state.backup_service = backup
    app.state.backup_scheduler = scheduler
    app.state.auth_service = auth_service
    app.state.content_service = ContentService(backend)
    app.state.upload_service = UploadService(settings.uploads_dir, max_bytes=settings.max_upload_bytes)
    app.state.rate_limiter = RateLimiter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    _install_error_handlers(app)

    os.makedirs(settings.uploads_dir, exist_ok=True)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.uploads_dir), name="uploads")

    app.include_router(auth_router.router)
    app.include_router(uploads_router.router)
    app.include_router(seed_router.router)
    app.include_router(public_router.router)
    for collection in CONTENT_COLLECTIONS:
        app.include_router(build_collection_router(collection))
    return app
