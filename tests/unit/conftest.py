from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from menuhub.application.ports.repositories import (
    DuplicateOrderNumberError,
    DuplicateRestaurantError,
)
from menuhub.domain.common.ids import MenuItemId, NotificationId, OrderId, RestaurantId
from menuhub.domain.common.money import Money
from menuhub.domain.menu.entities import MenuItem
from menuhub.domain.notification.entities import Notification
from menuhub.domain.order.entities import Order, OrderStatus
from menuhub.domain.restaurant.entities import Restaurant, TelegramTarget
from menuhub.domain.review.entities import Review


class FakeRestaurantRepository:
    def __init__(self, restaurants: list[Restaurant] | None = None) -> None:
        self.by_id: dict[str, Restaurant] = {
            str(restaurant.restaurant_id): restaurant for restaurant in restaurants or []
        }

    def add_if_unique(self, restaurant: Restaurant) -> None:
        for existing in self.by_id.values():
            if existing.slug == restaurant.slug or existing.username == restaurant.username:
                raise DuplicateRestaurantError(f"restaurant slug={restaurant.slug} is taken")
        self.by_id[str(restaurant.restaurant_id)] = restaurant

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        return self.by_id.get(str(restaurant_id))

    def get_by_slug(self, slug: str) -> Restaurant | None:
        return next((r for r in self.by_id.values() if r.slug == slug), None)

    def get_by_username_and_slug(self, username: str, slug: str) -> Restaurant | None:
        return next(
            (r for r in self.by_id.values() if r.slug == slug and r.username == username),
            None,
        )

    def list_active(self, search: str | None = None) -> list[Restaurant]:
        restaurants = [r for r in self.by_id.values() if r.is_active]
        if search:
            restaurants = [r for r in restaurants if search.lower() in r.name.lower()]
        return sorted(restaurants, key=lambda r: r.created_at, reverse=True)

    def set_active(self, restaurant_id: RestaurantId, active: bool) -> Restaurant | None:
        restaurant = self.by_id.get(str(restaurant_id))
        if restaurant is None:
            return None
        self.by_id[str(restaurant_id)] = replace(restaurant, is_active=active)
        return self.by_id[str(restaurant_id)]

    def update_rating(self, restaurant_id: RestaurantId, rating: float, review_count: int) -> None:
        restaurant = self.by_id[str(restaurant_id)]
        self.by_id[str(restaurant_id)] = restaurant.with_rating(rating, review_count)

    def delete(self, restaurant_id: RestaurantId) -> bool:
        return self.by_id.pop(str(restaurant_id), None) is not None

    def count(self) -> int:
        return len(self.by_id)


class FakeMenuItemRepository:
    def __init__(self, items: list[MenuItem] | None = None) -> None:
        self.by_id: dict[str, MenuItem] = {str(item.item_id): item for item in items or []}

    def add(self, item: MenuItem) -> None:
        self.by_id[str(item.item_id)] = item

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        return self.by_id.get(str(item_id))

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[MenuItem]:
        items = [i for i in self.by_id.values() if i.restaurant_id == restaurant_id]
        return sorted(items, key=lambda i: (i.category, i.name))

    def update(self, item: MenuItem) -> None:
        self.by_id[str(item.item_id)] = item

    def set_availability(self, item_id: MenuItemId, available: bool) -> MenuItem | None:
        item = self.by_id.get(str(item_id))
        if item is None:
            return None
        self.by_id[str(item_id)] = item.with_availability(available)
        return self.by_id[str(item_id)]

    def delete(self, item_id: MenuItemId) -> bool:
        return self.by_id.pop(str(item_id), None) is not None


class FakeOrderRepository:
    def __init__(self, duplicate_numbers: int = 0) -> None:
        self.orders: list[Order] = []
        self.duplicate_numbers = duplicate_numbers

    def add(self, order: Order) -> None:
        if self.duplicate_numbers > 0:
            self.duplicate_numbers -= 1
            raise DuplicateOrderNumberError(f"order number {order.order_number} already exists")
        if any(existing.order_number == order.order_number for existing in self.orders):
            raise DuplicateOrderNumberError(f"order number {order.order_number} already exists")
        self.orders.append(order)

    def get(self, order_id: OrderId) -> Order | None:
        return next((o for o in self.orders if o.order_id == order_id), None)

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Order]:
        orders = [o for o in self.orders if o.restaurant_id == restaurant_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def update_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None:
        for index, order in enumerate(self.orders):
            if order.order_id == order_id:
                self.orders[index] = order.with_status(status, updated_at)
                return self.orders[index]
        return None


class FakeNotificationRepository:
    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def add(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def get(self, notification_id: NotificationId) -> Notification | None:
        return next(
            (n for n in self.notifications if n.notification_id == notification_id),
            None,
        )

    def list_for_restaurant(
        self,
        restaurant_id: RestaurantId,
        unread_only: bool = False,
    ) -> list[Notification]:
        return [
            n
            for n in reversed(self.notifications)
            if n.restaurant_id == restaurant_id and not (unread_only and n.is_read)
        ]

    def set_read(self, notification_id: NotificationId, read: bool) -> Notification | None:
        for index, notification in enumerate(self.notifications):
            if notification.notification_id == notification_id:
                self.notifications[index] = notification.mark_read(read)
                return self.notifications[index]
        return None


class FakeReviewRepository:
    def __init__(self) -> None:
        self.reviews: list[Review] = []

    def add(self, review: Review) -> None:
        self.reviews.append(review)

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Review]:
        return [r for r in reversed(self.reviews) if r.restaurant_id == restaurant_id]

    def ratings_for_restaurant(self, restaurant_id: RestaurantId) -> list[int]:
        return [r.rating for r in self.reviews if r.restaurant_id == restaurant_id]

    def count(self) -> int:
        return len(self.reviews)


@dataclass
class PublishCall:
    channel: str
    message: str


class FakePublisher:
    def __init__(self) -> None:
        self.calls: list[PublishCall] = []

    def publish(self, channel: str, message: str) -> None:
        self.calls.append(PublishCall(channel=channel, message=message))


class FakeDispatcher:
    def __init__(self) -> None:
        self.calls: list[tuple[TelegramTarget | None, str]] = []

    def dispatch(self, target: TelegramTarget | None, message: str) -> None:
        self.calls.append((target, message))


class PlainTextHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


def make_restaurant(
    restaurant_id: str = "rst_001",
    slug: str = "al-bait",
    *,
    is_active: bool = True,
    telegram: TelegramTarget | None = None,
    username: str | None = None,
) -> Restaurant:
    return Restaurant(
        restaurant_id=RestaurantId(restaurant_id),
        slug=slug,
        name="Al Bait",
        username=username or f"owner-{slug}",
        password_hash="hashed:secret-pass",
        created_at=datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
        phone="+964 770 111 2222",
        telegram=telegram,
        is_active=is_active,
    )


def make_menu_item(
    item_id: str = "itm_001",
    restaurant_id: str = "rst_001",
    *,
    name: str = "Dolma",
    category: str = "Mains",
    price: int = 6000,
) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        restaurant_id=RestaurantId(restaurant_id),
        name=name,
        price=Money(amount=price, currency="IQD"),
        category=category,
        created_at=datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
        description="Stuffed vine leaves",
        image="https://cdn.example.com/dolma.jpg",
    )


@pytest.fixture
def restaurants() -> FakeRestaurantRepository:
    return FakeRestaurantRepository([make_restaurant()])


@pytest.fixture
def menu_items() -> FakeMenuItemRepository:
    return FakeMenuItemRepository()


@pytest.fixture
def orders() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def notifications() -> FakeNotificationRepository:
    return FakeNotificationRepository()


@pytest.fixture
def reviews() -> FakeReviewRepository:
    return FakeReviewRepository()


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def hasher() -> PlainTextHasher:
    return PlainTextHasher()


@pytest.fixture
def restaurant_factory():
    return make_restaurant


@pytest.fixture
def menu_item_factory():
    return make_menu_item
