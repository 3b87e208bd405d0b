from __future__ import annotations

import secrets
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from menuhub.domain.common.ids import MenuItemId, OrderId, OrderLineId, RestaurantId
from menuhub.domain.common.money import Money


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class FulfillmentType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"
    RESERVATION = "reservation"


@dataclass(frozen=True)
class CustomerInfo:
    phone: str
    name: str | None = None
    address: str | None = None

    def __post_init__(self) -> None:
        if not self.phone.strip():
            raise ValueError("phone must be non-empty")


@dataclass(frozen=True)
class OrderLine:
    line_id: OrderLineId
    name: str
    quantity: int
    unit_price: Money
    line_total: Money
    item_id: MenuItemId | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.unit_price.currency != self.line_total.currency:
            raise ValueError("line_total currency must match unit_price currency")
        if self.line_total.amount != self.unit_price.amount * self.quantity:
            raise ValueError("line_total must equal unit_price * quantity")


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    restaurant_id: RestaurantId
    order_number: str
    status: OrderStatus
    fulfillment_type: FulfillmentType
    customer: CustomerInfo
    lines: list[OrderLine]
    total: Money
    created_at: datetime
    updated_at: datetime
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        line_currency = self.lines[0].line_total.currency
        if self.total.currency != line_currency:
            raise ValueError("order total currency must match line currency")
        if self.total.amount != sum(line.line_total.amount for line in self.lines):
            raise ValueError("order total must equal sum of line totals")

    def with_status(self, status: OrderStatus, now: datetime) -> Order:
        return replace(self, status=status, updated_at=now)


def new_order_number(now: datetime) -> str:
    """ORD-<epoch millis>-<random hex>; the suffix separates same-millisecond orders."""
    millis = int(now.timestamp() * 1000)
    return f"ORD-{millis}-{secrets.token_hex(3)}"


def create_pending_order(
    order_id: OrderId,
    restaurant_id: RestaurantId,
    order_number: str,
    fulfillment_type: FulfillmentType,
    customer: CustomerInfo,
    lines: list[OrderLine],
    now: datetime,
    notes: str | None = None,
) -> Order:
    if not lines:
        raise ValueError("order must contain at least one line")

    total = Money(
        amount=sum(line.line_total.amount for line in lines),
        currency=lines[0].line_total.currency,
    )
    return Order(
        order_id=order_id,
        restaurant_id=restaurant_id,
        order_number=order_number,
        status=OrderStatus.PENDING,
        fulfillment_type=fulfillment_type,
        customer=customer,
        lines=lines,
        total=total,
        created_at=now,
        updated_at=now,
        notes=notes,
    )
