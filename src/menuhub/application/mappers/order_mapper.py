from __future__ import annotations

from menuhub.application.dto.responses import (
    CustomerResponse,
    OrderLineResponse,
    OrderResponse,
    PlacedOrderResponse,
)
from menuhub.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.order_id),
        restaurantId=str(order.restaurant_id),
        orderNumber=order.order_number,
        status=order.status.value,
        type=order.fulfillment_type.value,
        customer=CustomerResponse(
            name=order.customer.name,
            phone=order.customer.phone,
            address=order.customer.address,
        ),
        lines=[
            OrderLineResponse(
                lineId=str(line.line_id),
                itemId=str(line.item_id) if line.item_id else None,
                name=line.name,
                unitPrice=line.unit_price.amount,
                quantity=line.quantity,
                lineTotal=line.line_total.amount,
            )
            for line in order.lines
        ],
        total=order.total.amount,
        currency=order.total.currency,
        notes=order.notes,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )


def to_placed_order_response(order: Order) -> PlacedOrderResponse:
    return PlacedOrderResponse(
        id=str(order.order_id),
        orderNumber=order.order_number,
        total=order.total.amount,
        status=order.status.value,
    )
