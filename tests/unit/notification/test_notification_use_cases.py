from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from menuhub.application.use_cases.notifications import (
    ForbiddenTenantError,
    ListNotifications,
    MarkNotificationRead,
    NotificationNotFoundError,
    NotificationRestaurantNotFoundError,
)
from menuhub.domain.common.ids import NotificationId, OrderId, RestaurantId
from menuhub.domain.notification.entities import NotificationKind, new_order_notification


def _seed(notifications, notification_id: str, order_number: str) -> None:
    notifications.add(
        new_order_notification(
            notification_id=NotificationId(notification_id),
            restaurant_id=RestaurantId("rst_001"),
            order_id=OrderId(f"ord_{notification_id}"),
            order_number=order_number,
            now=datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
        )
    )


def test_new_order_notification_message() -> None:
    notification = new_order_notification(
        notification_id=NotificationId("ntf_1"),
        restaurant_id=RestaurantId("rst_001"),
        order_id=OrderId("ord_1"),
        order_number="ORD-1-abcdef",
        now=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )

    assert notification.message == "New order #ORD-1-abcdef"
    assert notification.kind == NotificationKind.NEW_ORDER
    assert notification.is_read is False


def test_list_notifications_for_owner(restaurants, notifications) -> None:
    _seed(notifications, "ntf_1", "ORD-1-aaaaaa")
    _seed(notifications, "ntf_2", "ORD-2-bbbbbb")
    use_case = ListNotifications(
        restaurant_repository=restaurants,
        notification_repository=notifications,
    )

    result = use_case.execute("al-bait", owner_restaurant_id="rst_001")

    assert [n.id for n in result] == ["ntf_2", "ntf_1"]
    assert result[0].type == "new_order"


def test_list_notifications_unread_only(restaurants, notifications) -> None:
    _seed(notifications, "ntf_1", "ORD-1-aaaaaa")
    _seed(notifications, "ntf_2", "ORD-2-bbbbbb")
    MarkNotificationRead(
        restaurant_repository=restaurants,
        notification_repository=notifications,
    ).execute(NotificationId("ntf_1"), owner_restaurant_id="rst_001")

    result = ListNotifications(
        restaurant_repository=restaurants,
        notification_repository=notifications,
    ).execute("al-bait", owner_restaurant_id="rst_001", unread_only=True)

    assert [n.id for n in result] == ["ntf_2"]


def test_list_notifications_rejects_other_tenant(restaurants, notifications) -> None:
    use_case = ListNotifications(
        restaurant_repository=restaurants,
        notification_repository=notifications,
    )

    with pytest.raises(ForbiddenTenantError):
        use_case.execute("al-bait", owner_restaurant_id="rst_other")
    with pytest.raises(NotificationRestaurantNotFoundError):
        use_case.execute("missing", owner_restaurant_id="rst_001")


def test_mark_read_checks_ownership(restaurants, notifications) -> None:
    _seed(notifications, "ntf_1", "ORD-1-aaaaaa")
    use_case = MarkNotificationRead(
        restaurant_repository=restaurants,
        notification_repository=notifications,
    )

    with pytest.raises(ForbiddenTenantError):
        use_case.execute(NotificationId("ntf_1"), owner_restaurant_id="rst_other")
    assert notifications.get(NotificationId("ntf_1")).is_read is False

    result = use_case.execute(NotificationId("ntf_1"), owner_restaurant_id="rst_001")
    assert result.isRead is True

    result = use_case.execute(NotificationId("ntf_1"), owner_restaurant_id="rst_001", read=False)
    assert result.isRead is False


def test_mark_read_unknown_notification(restaurants, notifications) -> None:
    with pytest.raises(NotificationNotFoundError):
        MarkNotificationRead(
            restaurant_repository=restaurants,
            notification_repository=notifications,
        ).execute(NotificationId("ntf_404"), owner_restaurant_id="rst_001")


def test_ownership_follows_restaurant_id_not_slug(
    restaurants, notifications, restaurant_factory
) -> None:
    restaurants.delete(RestaurantId("rst_001"))
    restaurants.add_if_unique(restaurant_factory("rst_002", "al-bait"))
    notifications.add(
        new_order_notification(
            notification_id=NotificationId("ntf_9"),
            restaurant_id=RestaurantId("rst_002"),
            order_id=OrderId("ord_9"),
            order_number="ORD-9-cccccc",
            now=datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
        )
    )

    with pytest.raises(ForbiddenTenantError):
        ListNotifications(
            restaurant_repository=restaurants,
            notification_repository=notifications,
        ).execute("al-bait", owner_restaurant_id="rst_001")
    with pytest.raises(ForbiddenTenantError):
        MarkNotificationRead(
            restaurant_repository=restaurants,
            notification_repository=notifications,
        ).execute(NotificationId("ntf_9"), owner_restaurant_id="rst_001")
