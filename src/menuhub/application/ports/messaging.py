from __future__ import annotations

from typing import Protocol

from menuhub.domain.restaurant.entities import TelegramTarget


class EventPublisher(Protocol):
    def publish(self, channel: str, message: str) -> None: ...


class NotificationDispatcher(Protocol):
    """Delivers a rendered message to a tenant's chat. Implementations must not raise."""

    def dispatch(self, target: TelegramTarget | None, message: str) -> None: ...
