from __future__ import annotations

from fastapi import BackgroundTasks

from menuhub.application.ports.messaging import NotificationDispatcher
from menuhub.domain.restaurant.entities import TelegramTarget


class BackgroundNotificationDispatcher(NotificationDispatcher):
    """Defers the wrapped dispatcher until after the response has been sent."""

    def __init__(self, inner: NotificationDispatcher, background_tasks: BackgroundTasks) -> None:
        self._inner = inner
        self._background_tasks = background_tasks

    def dispatch(self, target: TelegramTarget | None, message: str) -> None:
        self._background_tasks.add_task(self._inner.dispatch, target, message)
