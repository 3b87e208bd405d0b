from __future__ import annotations

import logging
import os

import httpx

from menuhub.application.metrics.order_lifecycle import record_dispatch
from menuhub.application.ports.messaging import NotificationDispatcher
from menuhub.domain.restaurant.entities import TelegramTarget

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_TIMEOUT_SECONDS = 5.0


def _timeout_seconds() -> float:
    raw_value = os.getenv("TELEGRAM_TIMEOUT_SECONDS")
    if not raw_value:
        return DEFAULT_TIMEOUT_SECONDS
    return float(raw_value)


class TelegramNotificationDispatcher(NotificationDispatcher):
    """One sendMessage call per order, no retry. Every failure is logged and dropped."""

    def __init__(
        self,
        api_base: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        base = api_base or os.getenv("TELEGRAM_API_BASE") or DEFAULT_API_BASE
        self._api_base = base.rstrip("/")
        if timeout_seconds is None:
            timeout_seconds = _timeout_seconds()
        self._timeout_seconds = timeout_seconds
        self._client = client

    def dispatch(self, target: TelegramTarget | None, message: str) -> None:
        if target is None:
            record_dispatch("skipped")
            return

        url = f"{self._api_base}/bot{target.bot_token}/sendMessage"
        payload = {"chat_id": target.chat_id, "text": message, "parse_mode": "Markdown"}
        try:
            response = self._post(url, payload)
        except httpx.HTTPError as exc:
            record_dispatch("transport_error")
            logger.warning(
                "telegram_dispatch_failed",
                extra={"chat_id": target.chat_id, "error": type(exc).__name__},
            )
            return
        except Exception:
            record_dispatch("error")
            logger.exception("telegram_dispatch_failed", extra={"chat_id": target.chat_id})
            return

        if response.status_code >= 400 or not _telegram_ok(response):
            record_dispatch("rejected")
            logger.warning(
                "telegram_dispatch_rejected",
                extra={"chat_id": target.chat_id, "status_code": response.status_code},
            )
            return

        record_dispatch("sent")
        logger.info("telegram_dispatch_sent", extra={"chat_id": target.chat_id})

    def _post(self, url: str, payload: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(url, json=payload, timeout=self._timeout_seconds)
        with httpx.Client(timeout=self._timeout_seconds) as client:
            return client.post(url, json=payload)


def _telegram_ok(response: httpx.Response) -> bool:
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("ok") is True
