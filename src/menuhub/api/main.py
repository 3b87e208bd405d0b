from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from menuhub.api.error_handling import register_exception_handlers
from menuhub.api.middleware.access_log import AccessLogMiddleware
from menuhub.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from menuhub.api.routes import health, menu, metrics, notifications, orders, restaurants, reviews
from menuhub.infrastructure.observability.logging_config import configure_logging
from menuhub.infrastructure.observability.otel import configure_otel

ROUTERS = (
    health.router,
    metrics.router,
    restaurants.router,
    menu.router,
    orders.router,
    reviews.router,
    notifications.router,
)


def _cors_allow_origins() -> list[str]:
    if os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}:
        return ["*"]
    return [
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "").split(",")
        if origin.strip()
    ]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="menuhub", version="0.1.0")
    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    # last added runs first: CORS, then request id, then the access log
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
