"""
Tests for admin login and session token verification.
"""

from __future__ import annotations

from datetime import datetime, timezone

import jwt
import pytest

from app.application.exceptions import AuthenticationError, ConfigurationError
from app.application.use_cases.admin_auth import AdminAuthUseCase

SECRET = "test-secret-that-is-long-enough-for-hs256"


def _auth(**overrides):
    params = {"username": "admin", "password": "s3cret", "secret": SECRET, "ttl_minutes": 60}
    params.update(overrides)
    return AdminAuthUseCase(**params)


def test_login_issues_token_that_verifies():
    auth = _auth()
    token = auth.login("admin", "s3cret")
    assert auth.verify(token) == "admin"


@pytest.mark.parametrize("username,password", [("admin", "wrong"), ("root", "s3cret"), ("", "")])
def test_login_rejects_bad_credentials(username, password):
    with pytest.raises(AuthenticationError):
        _auth().login(username, password)


def test_login_requires_configured_secret_and_password():
    with pytest.raises(ConfigurationError):
        _auth(secret=None).login("admin", "s3cret")
    with pytest.raises(ConfigurationError):
        _auth(password="").login("admin", "")


def test_expired_token_is_rejected():
    issued_long_ago = _auth(now=lambda: datetime(2020, 1, 1, tzinfo=timezone.utc))
    token = issued_long_ago.login("admin", "s3cret")

    with pytest.raises(AuthenticationError) as exc_info:
        _auth().verify(token)
    assert "expired" in str(exc_info.value).lower()


def test_token_signed_with_other_secret_is_rejected():
    token = _auth(secret="another-secret-that-is-long-enough-too").login("admin", "s3cret")
    with pytest.raises(AuthenticationError):
        _auth().verify(token)


def test_token_without_admin_scope_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "admin", "scope": "viewer", "iat": now, "exp": now.timestamp() + 600},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthenticationError):
        _auth().verify(token)


def test_garbage_token_is_rejected():
    with pytest.raises(AuthenticationError):
        _auth().verify("not-a-jwt")
