from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from menuhub.application.ports.security import TokenIssuer

ALGORITHM = "HS256"
DEFAULT_EXPIRES_DAYS = 7
_DEV_SECRET = "menuhub-dev-secret"


def jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}:
        return _DEV_SECRET
    raise RuntimeError("JWT_SECRET is not set")


def _expires_days() -> int:
    return int(os.getenv("JWT_EXPIRES_DAYS", str(DEFAULT_EXPIRES_DAYS)))


class JoseTokenIssuer(TokenIssuer):
    def __init__(self, secret: str | None = None, expires_days: int | None = None) -> None:
        self._secret = secret or jwt_secret()
        self._expires = timedelta(days=expires_days if expires_days is not None else _expires_days())

    def issue(self, subject: str, claims: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            **claims,
            "sub": subject,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(to_encode, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any] | None:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            return None
