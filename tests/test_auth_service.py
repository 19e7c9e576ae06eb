from __future__ import annotations

import time

import pytest

from realty_api.core import config as core_config
from realty_api.core.errors import InvalidCredentialsError, TokenInvalidError, TokenMissingError
from realty_api.core.security import hash_password, is_hashed
from realty_api.repositories.json_storage import JsonFileBackend
from realty_api.services.auth_service import AuthService


@pytest.fixture()
def svc(app_env):
    backend = JsonFileBackend(app_env / "data")
    backend.initialize()
    service = AuthService(backend, core_config.get_settings())
    service.seed_admin()
    return service


def _stored_user(svc: AuthService, username: str) -> dict:
    return next(user for user in svc.backend.list("users") if user["username"] == username)


def test_seed_admin_runs_once_and_hashes(svc):
    assert svc.seed_admin() is False
    users = svc.backend.list("users")
    assert len(users) == 1
    assert users[0]["username"] == "admin"
    assert is_hashed(users[0]["password"])


def test_login_issues_token_carrying_identity(svc):
    result = svc.login("admin", "s3cret-pass")
    claims = svc.verify(result.token)
    assert claims["username"] == "admin"
    assert claims["id"] == result.user_id
    assert claims["exp"] - claims["iat"] == 2 * 60 * 60


def test_token_valid_for_two_hours_then_rejected(svc):
    now = int(time.time())
    fresh = svc.login("admin", "s3cret-pass", now=now - (2 * 60 * 60 - 60)).token
    assert svc.verify(fresh)["username"] == "admin"

    stale = svc.login("admin", "s3cret-pass", now=now - (2 * 60 * 60 + 60)).token
    with pytest.raises(TokenInvalidError):
        svc.verify(stale)


def test_wrong_password_and_unknown_user_fail_identically(svc):
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        svc.login("admin", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        svc.login("ghost", "s3cret-pass")
    assert type(wrong_password.value) is type(unknown_user.value)
    assert wrong_password.value.code == unknown_user.value.code


def test_missing_credentials_are_rejected(svc):
    with pytest.raises(InvalidCredentialsError):
        svc.login(None, None)
    with pytest.raises(InvalidCredentialsError):
        svc.login("admin", "")


def test_verify_rejects_missing_garbage_and_foreign_tokens(svc, monkeypatch):
    with pytest.raises(TokenMissingError):
        svc.verify(None)
    with pytest.raises(TokenInvalidError):
        svc.verify("not-a-jwt")

    monkeypatch.setenv("JWT_SECRET", "another-secret")
    core_config.get_settings.cache_clear()
    other = AuthService(svc.backend, core_config.get_settings())
    foreign = other.login("admin", "s3cret-pass").token
    with pytest.raises(TokenInvalidError):
        svc.verify(foreign)


def test_legacy_plaintext_password_is_upgraded_on_login(svc):
    svc.backend.insert("users", {"username": "legacy", "password": "plain-old"})
    svc.login("legacy", "plain-old")
    assert is_hashed(_stored_user(svc, "legacy")["password"])
    svc.login("legacy", "plain-old")


def test_set_password_updates_existing_credential(svc):
    user_id = svc.set_password("admin", "brand-new-pass")
    assert user_id == _stored_user(svc, "admin")["id"]
    with pytest.raises(InvalidCredentialsError):
        svc.login("admin", "s3cret-pass")
    assert svc.login("admin", "brand-new-pass").username == "admin"


def test_hash_password_is_salted():
    assert hash_password("same") != hash_password("same")
