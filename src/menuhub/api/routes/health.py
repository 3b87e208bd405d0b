from __future__ import annotations

from fastapi import APIRouter, Response, status

from menuhub.infrastructure.db.session import ping_database
from menuhub.infrastructure.messaging.redis_client import ping_redis

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    database_ready = ping_database(timeout_seconds=1.0)
    redis_ready = ping_redis(timeout_seconds=1.0)
    checks: dict[str, object] = {
        "database": database_ready,
        "redis": "disabled" if redis_ready is None else redis_ready,
    }

    if database_ready and redis_ready is not False:
        return {"status": "ok", "checks": checks}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": checks}
