"""Security helpers (password hashing and session tokens)."""

from __future__ import annotations

import secrets
import time
from typing import Any

import jwt
from argon2 import PasswordHasher, exceptions as argon_exc

from .errors import TokenInvalidError, TokenMissingError

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    """Create a modern Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def is_hashed(stored: str | None) -> bool:
    return (stored or "").startswith(_PREFIX)


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if stored.startswith(_PREFIX):
        hashed = stored[len(_PREFIX) :]
        try:
            return _ph.verify(hashed, password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False
    # legacy plaintext records
    if not stored:
        return False
    return secrets.compare_digest(stored.encode("utf-8"), (password or "").encode("utf-8"))


def issue_token(claims: dict[str, Any], *, secret: str, algorithm: str, ttl_seconds: int, now: int | None = None) -> str:
    issued_at = int(now if now is not None else time.time())
    payload = dict(claims)
    payload.update({"iat": issued_at, "exp": issued_at + ttl_seconds})
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str | None, *, secret: str, algorithm: str) -> dict[str, Any]:
    """Return the claims of a valid token or raise an AuthError subclass."""
    if not token:
        raise TokenMissingError()
    try:
        return jwt.decode(token, secret, algorithms=[algorithm], options={"require": ["exp"]})
    except jwt.ExpiredSignatureError as exc:
        raise TokenInvalidError("token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenInvalidError(str(exc)) from exc


def bearer_token(authorization: str | None) -> str | None:
    header = (authorization or "").strip()
    if not header.startswith("Bearer "):
        return None
    token = header[len("Bearer ") :].strip()
    return token or None
