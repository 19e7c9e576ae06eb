"""
Authentication use cases: admin seeding, login and token verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import logging
import time

from realty_api.core.config import Settings
from realty_api.core.errors import InvalidCredentialsError, TokenInvalidError
from realty_api.core.security import decode_token, hash_password, is_hashed, issue_token, verify_password
from realty_api.domain.collections import USERS, Record
from realty_api.repositories.base import StorageBackend, find_record

logger = logging.getLogger(__name__)


@dataclass
class LoginSuccess:
    token: str
    user_id: int
    username: str
    expires_at: int


@dataclass
class AuthService:
    """Issues and verifies session tokens for the stored credentials."""

    backend: StorageBackend
    settings: Settings

    # -------------------------------------- helpers --------------------------------------
    def _now(self) -> int:
        return int(time.time())

    def _find_user(self, username: str) -> Optional[Record]:
        if not username:
            return None
        return find_record(self.backend, USERS, username=username)

    # -------------------------------------- seeding --------------------------------------
    def seed_admin(self) -> bool:
        """Create the configured admin when no credential exists yet."""
        if self.backend.list(USERS):
            return False
        self.backend.insert(
            USERS,
            {"username": self.settings.admin_username, "password": hash_password(self.settings.admin_password)},
        )
        logger.info("Seeded admin account %r", self.settings.admin_username)
        return True

    def set_password(self, username: str, password: str) -> int:
        """Create or update a credential; returns its id."""
        hashed = hash_password(password)
        user = self._find_user(username)
        if user:
            self.backend.update(USERS, int(user["id"]), {"password": hashed})
            return int(user["id"])
        return self.backend.insert(USERS, {"username": username, "password": hashed})

    # -------------------------------------- login --------------------------------------
    def login(self, username: str | None, password: str | None, *, now: Optional[int] = None) -> LoginSuccess:
        username = (username or "").strip()
        user = self._find_user(username)
        stored = (user or {}).get("password")
        if not user or not password or not verify_password(password, stored):
            logger.warning("Failed login for %r", username)
            raise InvalidCredentialsError()
        user_id = int(user["id"])
        if not is_hashed(stored):
            self.backend.update(USERS, user_id, {"password": hash_password(password)})
            logger.info("Upgraded stored password of %r to argon2", username)
        issued_at = self._now() if now is None else now
        token = issue_token(
            {"id": user_id, "username": user["username"]},
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            ttl_seconds=self.settings.token_ttl_seconds,
            now=issued_at,
        )
        return LoginSuccess(
            token=token,
            user_id=user_id,
            username=user["username"],
            expires_at=issued_at + self.settings.token_ttl_seconds,
        )

    def verify(self, token: str | None) -> dict[str, Any]:
        """Return the claims of a valid token; raise an AuthError otherwise."""
        claims = decode_token(token, secret=self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)
        if "id" not in claims or "username" not in claims:
            raise TokenInvalidError("token without identity claims")
        return claims
