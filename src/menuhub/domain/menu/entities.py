from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from menuhub.domain.common.ids import MenuItemId, RestaurantId
from menuhub.domain.common.money import Money


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    restaurant_id: RestaurantId
    name: str
    price: Money
    category: str
    created_at: datetime
    description: str | None = None
    image: str | None = None
    available: bool = True

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")

    def with_availability(self, available: bool) -> MenuItem:
        return replace(self, available=available)
