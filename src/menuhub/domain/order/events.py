from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from menuhub.domain.common.ids import OrderId, RestaurantId
from menuhub.domain.order.entities import OrderStatus


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: OrderId
    restaurant_id: RestaurantId
    from_status: OrderStatus
    to_status: OrderStatus
    occurred_at: datetime
