from __future__ import annotations

from typing import Any, Protocol


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, subject: str, claims: dict[str, Any]) -> str: ...

    def decode(self, token: str) -> dict[str, Any] | None: ...
