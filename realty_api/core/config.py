"""
Configuration helpers for the realty backend.

Exposes a frozen Settings object read from environment variables so that
routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("json", "sql", "mongo")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    port: int
    public_base_url: str
    cors_origins: tuple[str, ...]
    storage_backend: str
    data_dir: str
    backup_dir: str
    uploads_dir: str
    database_url: str
    mongodb_uri: str
    mongodb_db: str
    jwt_secret: str
    jwt_algorithm: str
    token_ttl_seconds: int
    admin_username: str
    admin_password: str
    backup_interval_seconds: int
    backup_retention: int
    backup_on_write: bool
    restore_on_startup: bool
    login_rate_limit: int
    public_rate_limit: int
    rate_limit_window_seconds: int
    log_level: str
    max_upload_bytes: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip().rstrip("/") for item in (value or "").split(",") if item.strip())

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}")

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        port=_int(os.getenv("PORT", "3001"), 3001),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:3001").rstrip("/"),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
        storage_backend=backend,
        data_dir=os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data")),
        backup_dir=os.getenv("BACKUP_DIR", os.path.join(os.getcwd(), "backup")),
        uploads_dir=os.getenv("UPLOADS_DIR", os.path.join(os.getcwd(), "uploads")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./data.sqlite"),
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        mongodb_db=os.getenv("MONGODB_DB", "realty"),
        jwt_secret=os.getenv("JWT_SECRET", "change_me_secret"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS", "7200"), 7200),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        backup_interval_seconds=_int(os.getenv("BACKUP_INTERVAL_SECONDS", "3600"), 3600),
        backup_retention=max(1, _int(os.getenv("BACKUP_RETENTION", "5"), 5)),
        backup_on_write=_bool(os.getenv("BACKUP_ON_WRITE"), True),
        restore_on_startup=_bool(os.getenv("RESTORE_ON_STARTUP"), True),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        public_rate_limit=_int(os.getenv("PUBLIC_RATE_LIMIT", "20"), 20),
        rate_limit_window_seconds=_int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "300"), 300),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        max_upload_bytes=_int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)), 20 * 1024 * 1024),
    )
