from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from menuhub.domain.order.entities import Order

ENVELOPE_VERSION = 1


def events_channel(restaurant_id: str) -> str:
    return f"events:{restaurant_id}"


@dataclass(frozen=True)
class EventEnvelope:
    event_type: str
    occurred_at: str
    restaurant_id: str
    payload: dict[str, Any]
    request_id: str | None = None
    trace_id: str | None = None
    version: int = ENVELOPE_VERSION
    event_id: str = field(default_factory=lambda: str(uuid4()))

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"), ensure_ascii=False)


def _order_payload(order: Order) -> dict[str, Any]:
    return {
        "orderId": str(order.order_id),
        "orderNumber": order.order_number,
        "status": order.status.value,
        "type": order.fulfillment_type.value,
        "total": order.total.amount,
        "currency": order.total.currency,
        "createdAt": order.created_at.isoformat(),
        "lines": [
            {
                "name": line.name,
                "quantity": line.quantity,
                "unitPrice": line.unit_price.amount,
                "lineTotal": line.line_total.amount,
            }
            for line in order.lines
        ],
    }


def serialize_order_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order: Order,
    trace_id: str | None,
    request_id: str | None,
    previous_status: str | None = None,
) -> str:
    payload = _order_payload(order)
    if previous_status is not None:
        payload["previousStatus"] = previous_status
    return EventEnvelope(
        event_type=event_type,
        occurred_at=occurred_at.isoformat(),
        restaurant_id=str(order.restaurant_id),
        payload=payload,
        request_id=request_id,
        trace_id=trace_id,
    ).to_json()
