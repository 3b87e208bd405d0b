from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from menuhub.domain.common.ids import NotificationId, OrderId, RestaurantId


class NotificationKind(str, Enum):
    NEW_ORDER = "new_order"


@dataclass(frozen=True)
class Notification:
    notification_id: NotificationId
    restaurant_id: RestaurantId
    order_id: OrderId
    message: str
    kind: NotificationKind
    created_at: datetime
    is_read: bool = False

    def mark_read(self, read: bool = True) -> Notification:
        return replace(self, is_read=read)


def new_order_notification(
    notification_id: NotificationId,
    restaurant_id: RestaurantId,
    order_id: OrderId,
    order_number: str,
    now: datetime,
) -> Notification:
    return Notification(
        notification_id=notification_id,
        restaurant_id=restaurant_id,
        order_id=order_id,
        message=f"New order #{order_number}",
        kind=NotificationKind.NEW_ORDER,
        created_at=now,
    )
