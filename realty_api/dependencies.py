"""
Request-scoped accessors for the services wired onto ``app.state``.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from realty_api.core.config import Settings
from realty_api.core.rate_limiter import RateLimiter, rate_limit_ip
from realty_api.core.security import bearer_token
from realty_api.services.auth_service import AuthService
from realty_api.services.content_service import ContentService
from realty_api.services.upload_service import UploadService


def _state(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} is not configured")
    return value


def get_app_settings(request: Request) -> Settings:
    return _state(request, "settings")


def get_content_service(request: Request) -> ContentService:
    return _state(request, "content_service")


def get_auth_service(request: Request) -> AuthService:
    return _state(request, "auth_service")


def get_upload_service(request: Request) -> UploadService:
    return _state(request, "upload_service")


def get_rate_limiter(request: Request) -> RateLimiter:
    return _state(request, "rate_limiter")


def require_admin(request: Request) -> dict[str, Any]:
    """Verified token claims for the ``Authorization: Bearer`` header."""
    token = bearer_token(request.headers.get("authorization"))
    return get_auth_service(request).verify(token)


def limit_login(request: Request) -> None:
    settings = get_app_settings(request)
    rate_limit_ip(
        get_rate_limiter(request),
        request,
        "auth:login",
        limit=settings.login_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
    )


def limit_public(request: Request) -> None:
    settings = get_app_settings(request)
    rate_limit_ip(
        get_rate_limiter(request),
        request,
        "public",
        limit=settings.public_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
    )
