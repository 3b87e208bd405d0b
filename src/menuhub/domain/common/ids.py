from __future__ import annotations

from typing import NewType

RestaurantId = NewType("RestaurantId", str)
MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
OrderLineId = NewType("OrderLineId", str)
NotificationId = NewType("NotificationId", str)
ReviewId = NewType("ReviewId", str)
