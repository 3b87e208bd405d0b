from __future__ import annotations

from datetime import datetime
from typing import Protocol

from menuhub.domain.common.ids import (
    MenuItemId,
    NotificationId,
    OrderId,
    RestaurantId,
)
from menuhub.domain.menu.entities import MenuItem
from menuhub.domain.notification.entities import Notification
from menuhub.domain.order.entities import Order, OrderStatus
from menuhub.domain.restaurant.entities import Restaurant
from menuhub.domain.review.entities import Review


class RestaurantRepository(Protocol):
    def add_if_unique(self, restaurant: Restaurant) -> None: ...

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None: ...

    def get_by_slug(self, slug: str) -> Restaurant | None: ...

    def get_by_username_and_slug(self, username: str, slug: str) -> Restaurant | None: ...

    def list_active(self, search: str | None = None) -> list[Restaurant]: ...

    def set_active(self, restaurant_id: RestaurantId, active: bool) -> Restaurant | None: ...

    def update_rating(
        self,
        restaurant_id: RestaurantId,
        rating: float,
        review_count: int,
    ) -> None: ...

    def delete(self, restaurant_id: RestaurantId) -> bool: ...

    def count(self) -> int: ...


class MenuItemRepository(Protocol):
    def add(self, item: MenuItem) -> None: ...

    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[MenuItem]: ...

    def update(self, item: MenuItem) -> None: ...

    def set_availability(self, item_id: MenuItemId, available: bool) -> MenuItem | None: ...

    def delete(self, item_id: MenuItemId) -> bool: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Order]: ...

    def update_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None: ...


class NotificationRepository(Protocol):
    def add(self, notification: Notification) -> None: ...

    def get(self, notification_id: NotificationId) -> Notification | None: ...

    def list_for_restaurant(
        self,
        restaurant_id: RestaurantId,
        unread_only: bool = False,
    ) -> list[Notification]: ...

    def set_read(self, notification_id: NotificationId, read: bool) -> Notification | None: ...


class ReviewRepository(Protocol):
    def add(self, review: Review) -> None: ...

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Review]: ...

    def ratings_for_restaurant(self, restaurant_id: RestaurantId) -> list[int]: ...

    def count(self) -> int: ...


class DuplicateRestaurantError(Exception):
    pass


class DuplicateOrderNumberError(Exception):
    pass
