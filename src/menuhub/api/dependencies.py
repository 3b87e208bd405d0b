from __future__ import annotations

import os
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from menuhub.api.middleware.request_id import get_request_id
from menuhub.application.use_cases.context import TraceContext
from menuhub.domain.order.status_policy import StatusPolicy
from menuhub.infrastructure.observability.otel import current_trace_id
from menuhub.infrastructure.security.tokens import JoseTokenIssuer

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Owner:
    restaurant_id: str
    slug: str
    username: str | None


def currency() -> str:
    return os.getenv("MENUHUB_CURRENCY", "IQD").upper()


def status_policy() -> StatusPolicy:
    raw_value = os.getenv("ORDER_STATUS_POLICY", StatusPolicy.PERMISSIVE.value).lower()
    try:
        return StatusPolicy(raw_value)
    except ValueError as exc:
        raise RuntimeError("ORDER_STATUS_POLICY must be one of: permissive, strict") from exc


def trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())


def current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Owner:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="bearer token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = JoseTokenIssuer().decode(credentials.credentials)
    if not claims or not claims.get("sub") or not claims.get("slug"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Owner(
        restaurant_id=str(claims["sub"]),
        slug=str(claims["slug"]),
        username=claims.get("username"),
    )
