from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from menuhub.api.middleware.request_id import get_request_id
from menuhub.infrastructure.observability.otel import current_span_ids

# structured keys copied from `extra=` into the JSON line when present
EXTRA_FIELDS = (
    "method",
    "path",
    "route",
    "status_code",
    "duration_ms",
    "restaurant_id",
    "order_id",
    "order_number",
    "active",
    "chat_id",
    "channel",
    "receivers",
    "endpoint",
    "error",
)

QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "passlib": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        trace_id, span_id = current_span_ids()
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
            "trace_id": trace_id,
            "span_id": span_id,
        }
        payload.update(
            (key, getattr(record, key))
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _log_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Route every logger through one stdout JSON handler. Safe to call more than once."""
    root_logger = logging.getLogger()
    if any(isinstance(handler.formatter, JsonFormatter) for handler in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_log_level())

    # AccessLogMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").propagate = False
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
