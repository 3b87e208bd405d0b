from __future__ import annotations

from datetime import timezone

from menuhub.domain.order.entities import FulfillmentType, Order
from menuhub.domain.restaurant.entities import Restaurant

FULFILLMENT_LABELS: dict[FulfillmentType, str] = {
    FulfillmentType.DELIVERY: "Delivery",
    FulfillmentType.PICKUP: "Pickup",
    FulfillmentType.RESERVATION: "Table reservation",
}

STATUS_LABELS = {
    "pending": "Pending",
    "preparing": "Preparing",
    "ready": "Ready",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

_MARKDOWN_SPECIALS = ("_", "*", "`", "[")


def _escape(value: str) -> str:
    for char in _MARKDOWN_SPECIALS:
        value = value.replace(char, f"\\{char}")
    return value


def _amount(value: int, currency: str) -> str:
    return f"{value:,} {currency}"


def render_order_message(restaurant: Restaurant, order: Order) -> str:
    """Telegram Markdown text announcing a new order to the restaurant."""
    created = order.created_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    currency = order.total.currency

    lines = [
        f"*New order at {_escape(restaurant.name)}*",
        "",
        f"Order number: `{order.order_number}`",
        f"Time: {created}",
        "",
        "Customer:",
    ]
    if order.customer.name:
        lines.append(f"Name: {_escape(order.customer.name)}")
    lines.append(f"Phone: {_escape(order.customer.phone)}")
    if order.customer.address:
        lines.append(f"Address: {_escape(order.customer.address)}")
    lines.extend(
        [
            "",
            f"Type: {FULFILLMENT_LABELS[order.fulfillment_type]}",
            "",
            "*Items:*",
        ]
    )
    for line in order.lines:
        lines.append(
            f"• {_escape(line.name)} × {line.quantity}: "
            f"{_amount(line.line_total.amount, currency)}"
        )
    lines.extend(["", f"*Total: {_amount(order.total.amount, currency)}*"])
    if order.notes:
        lines.extend(["", f"Notes: {_escape(order.notes)}"])
    lines.extend(["", f"Status: {STATUS_LABELS[order.status.value]}"])
    return "\n".join(lines)
