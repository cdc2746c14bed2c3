from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from app.application.exceptions import AuthenticationError, ConfigurationError

TOKEN_ALGORITHM = "HS256"
TOKEN_SCOPE = "admin"


class AdminAuthUseCase:
    """Static admin credentials exchanged for short-lived signed session tokens."""

    def __init__(
        self,
        username: str,
        password: str | None,
        secret: str | None,
        ttl_minutes: int = 720,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._username = username
        self._password = password
        self._secret = secret
        self._ttl = timedelta(minutes=ttl_minutes)
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    def login(self, username: str, password: str) -> str:
        secret = self._require_secret()
        if not self._password:
            raise ConfigurationError("ADMIN_PASSWORD is not configured")

        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        if not (user_ok and password_ok):
            self._logger.warning("Admin login rejected")
            raise AuthenticationError("Invalid username or password")

        issued_at = self._now()
        payload = {
            "sub": username,
            "scope": TOKEN_SCOPE,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> str:
        """Check signature, expiry and scope. Returns the admin username."""
        secret = self._require_secret()
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Session expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid session token: {e}")

        if claims.get("scope") != TOKEN_SCOPE:
            raise AuthenticationError("Token scope not allowed")
        return str(claims["sub"])

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("ADMIN_TOKEN_SECRET is not configured")
        return self._secret
