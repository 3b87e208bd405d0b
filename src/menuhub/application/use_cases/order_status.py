from __future__ import annotations

import logging
from datetime import datetime, timezone

from menuhub.application.dto.responses import OrderResponse
from menuhub.application.mappers.event_envelope import events_channel, serialize_order_event
from menuhub.application.mappers.order_mapper import to_order_response
from menuhub.application.metrics.order_lifecycle import record_transition
from menuhub.application.ports.messaging import EventPublisher
from menuhub.application.ports.repositories import OrderRepository, RestaurantRepository
from menuhub.application.use_cases.context import TraceContext
from menuhub.domain.common.ids import OrderId
from menuhub.domain.order.entities import OrderStatus
from menuhub.domain.order.events import OrderStatusChanged
from menuhub.domain.order.status_policy import StatusPolicy, is_transition_allowed

logger = logging.getLogger(__name__)


class OrderNotFoundError(Exception):
    pass


class InvalidOrderStatusError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.details = {
            "field": "status",
            "allowed": [status.value for status in OrderStatus],
        }


class InvalidOrderTransitionError(Exception):
    pass


class RestaurantOrdersNotFoundError(Exception):
    pass


class UpdateOrderStatus:
    def __init__(
        self,
        order_repository: OrderRepository,
        publisher: EventPublisher,
        policy: StatusPolicy = StatusPolicy.PERMISSIVE,
    ) -> None:
        self._order_repository = order_repository
        self._publisher = publisher
        self._policy = policy

    def execute(
        self,
        order_id: OrderId,
        status: str,
        trace_ctx: TraceContext,
    ) -> OrderResponse:
        try:
            target = OrderStatus(status)
        except ValueError as exc:
            raise InvalidOrderStatusError(f"unknown order status: {status}") from exc

        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        if order.status == target:
            return to_order_response(order)
        if not is_transition_allowed(order.status, target, self._policy):
            raise InvalidOrderTransitionError(
                f"cannot move order from status={order.status.value} to status={target.value}"
            )

        now = datetime.now(timezone.utc)
        updated = self._order_repository.update_status(order_id, target, now)
        if updated is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        event = OrderStatusChanged(
            order_id=updated.order_id,
            restaurant_id=updated.restaurant_id,
            from_status=order.status,
            to_status=target,
            occurred_at=now,
        )
        record_transition(from_status=event.from_status, to_status=event.to_status)
        message = serialize_order_event(
            event_type="order.status_changed",
            occurred_at=event.occurred_at,
            order=updated,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
            previous_status=event.from_status.value,
        )
        try:
            self._publisher.publish(
                channel=events_channel(str(event.restaurant_id)),
                message=message,
            )
        except Exception:
            logger.warning(
                "event_publish_failed",
                exc_info=True,
                extra={"order_id": str(order_id), "restaurant_id": str(event.restaurant_id)},
            )

        return to_order_response(updated)


class ListOrders:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        order_repository: OrderRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._order_repository = order_repository

    def execute(self, slug: str) -> list[OrderResponse]:
        restaurant = self._restaurant_repository.get_by_slug(slug)
        if restaurant is None:
            raise RestaurantOrdersNotFoundError(f"restaurant not found for slug={slug}")
        orders = self._order_repository.list_for_restaurant(restaurant.restaurant_id)
        return [to_order_response(order) for order in orders]
