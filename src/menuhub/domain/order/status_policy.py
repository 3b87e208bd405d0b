from __future__ import annotations

from enum import Enum

from menuhub.domain.order.entities import OrderStatus


class StatusPolicy(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


_STRICT_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def is_transition_allowed(
    current: OrderStatus,
    target: OrderStatus,
    policy: StatusPolicy = StatusPolicy.PERMISSIVE,
) -> bool:
    if policy is StatusPolicy.PERMISSIVE:
        return True
    return target in _STRICT_TRANSITIONS[current]
