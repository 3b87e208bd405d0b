from __future__ import annotations

from prometheus_client import Counter

from menuhub.domain.order.entities import Order, OrderStatus

ORDERS_PLACED_TOTAL = Counter(
    "menuhub_orders_placed_total",
    "Total number of orders accepted by intake.",
    ["restaurant_id", "type"],
)

ORDER_REJECTED_TOTAL = Counter(
    "menuhub_orders_rejected_total",
    "Total number of order intake requests rejected before persistence.",
    ["reason"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "menuhub_order_transition_total",
    "Total number of order status transitions.",
    ["from", "to"],
)

NOTIFICATION_DISPATCH_TOTAL = Counter(
    "menuhub_notification_dispatch_total",
    "Outcomes of outbound chat notifications.",
    ["outcome"],
)

REVIEWS_ADDED_TOTAL = Counter(
    "menuhub_reviews_added_total",
    "Total number of reviews added.",
    ["rating"],
)


def record_order_placed(order: Order) -> None:
    ORDERS_PLACED_TOTAL.labels(
        restaurant_id=str(order.restaurant_id),
        type=order.fulfillment_type.value,
    ).inc()


def record_order_rejected(reason: str) -> None:
    ORDER_REJECTED_TOTAL.labels(reason=reason).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_dispatch(outcome: str) -> None:
    NOTIFICATION_DISPATCH_TOTAL.labels(outcome=outcome).inc()


def record_review_added(rating: int) -> None:
    REVIEWS_ADDED_TOTAL.labels(rating=str(rating)).inc()
