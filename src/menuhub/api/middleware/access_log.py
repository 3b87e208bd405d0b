from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("menuhub.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "route", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
)


def route_template(request: Request) -> str:
    """`/v1/orders/{slug}` rather than the concrete path, to keep label cardinality bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._observe(request, 500, started, failed=True)
            raise
        self._observe(request, response.status_code, started)
        return response

    def _observe(
        self,
        request: Request,
        status_code: int,
        started: float,
        failed: bool = False,
    ) -> None:
        elapsed = time.perf_counter() - started
        route = route_template(request)
        REQUEST_COUNT.labels(
            method=request.method, route=route, status_code=str(status_code)
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, route=route).observe(elapsed)

        extra = {
            "method": request.method,
            "path": request.url.path,
            "route": route,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
        }
        if failed:
            logger.exception("request_error", extra=extra)
        else:
            logger.info("request_complete", extra=extra)
