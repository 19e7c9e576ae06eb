#!/usr/bin/env python3
"""
Create or update an admin credential on the configured storage backend.

Usage:
  python scripts/set_admin_password.py --username admin --password 'new-secret'
"""
from __future__ import annotations

import argparse
import sys

from realty_api.core.config import get_settings
from realty_api.repositories import build_backend
from realty_api.services.auth_service import AuthService


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or update an admin credential")
    ap.add_argument("--username", required=True, help="login name (ex.: admin)")
    ap.add_argument("--password", required=True, help="new password (stored as argon2 hash)")
    args = ap.parse_args()

    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Invalid username")
    if len(args.password or "") < 8:
        raise SystemExit("Password must have at least 8 characters")

    settings = get_settings()
    backend = build_backend(settings)
    backend.initialize()
    try:
        user_id = AuthService(backend, settings).set_password(username, args.password)
    finally:
        backend.close()
    print(f"OK: credential {username!r} saved (id {user_id})")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
