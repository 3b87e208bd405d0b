from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime

from menuhub.domain.common.ids import RestaurantId

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class TelegramTarget:
    bot_token: str
    chat_id: str

    def __post_init__(self) -> None:
        if not self.bot_token.strip() or not self.chat_id.strip():
            raise ValueError("telegram bot token and chat id must both be non-empty")


@dataclass(frozen=True)
class Restaurant:
    restaurant_id: RestaurantId
    slug: str
    name: str
    username: str
    password_hash: str
    created_at: datetime
    logo: str | None = None
    phone: str | None = None
    address: str | None = None
    telegram: TelegramTarget | None = None
    is_active: bool = True
    rating: float = 0.0
    review_count: int = 0

    def __post_init__(self) -> None:
        if not SLUG_PATTERN.match(self.slug):
            raise ValueError("slug must be lowercase letters, digits and single hyphens")
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.username.strip():
            raise ValueError("username must be non-empty")
        if self.review_count < 0:
            raise ValueError("review_count must be >= 0")
        if not 0.0 <= self.rating <= 5.0:
            raise ValueError("rating must be within [0, 5]")

    def with_rating(self, rating: float, review_count: int) -> Restaurant:
        return replace(self, rating=rating, review_count=review_count)


def telegram_target(bot_token: str | None, chat_id: str | None) -> TelegramTarget | None:
    """Both credentials or nothing; a half-configured target is treated as absent."""
    if not bot_token or not bot_token.strip() or not chat_id or not chat_id.strip():
        return None
    return TelegramTarget(bot_token=bot_token.strip(), chat_id=chat_id.strip())
