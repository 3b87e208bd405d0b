from __future__ import annotations

import logging

from menuhub.application.ports.messaging import EventPublisher
from menuhub.infrastructure.messaging.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class RedisEventPublisher(EventPublisher):
    """Publishes order event envelopes on the per-restaurant events channel."""

    def __init__(self, timeout_seconds: float = 1.0) -> None:
        self._timeout_seconds = timeout_seconds

    def publish(self, channel: str, message: str) -> None:
        client = get_redis_client(timeout_seconds=self._timeout_seconds)
        if client is None:
            logger.debug("event_publish_skipped", extra={"channel": channel})
            return
        receivers = client.publish(channel, message)
        logger.debug("event_published", extra={"channel": channel, "receivers": receivers})
