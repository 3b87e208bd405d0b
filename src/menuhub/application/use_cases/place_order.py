from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from menuhub.application.dto.requests import PlaceOrderRequest
from menuhub.application.dto.responses import PlacedOrderResponse
from menuhub.application.mappers.event_envelope import events_channel, serialize_order_event
from menuhub.application.mappers.order_mapper import to_placed_order_response
from menuhub.application.metrics.order_lifecycle import record_order_placed, record_order_rejected
from menuhub.application.notifications.order_message import render_order_message
from menuhub.application.ports.messaging import EventPublisher, NotificationDispatcher
from menuhub.application.ports.repositories import (
    DuplicateOrderNumberError,
    NotificationRepository,
    OrderRepository,
    RestaurantRepository,
)
from menuhub.application.use_cases.context import TraceContext
from menuhub.domain.common.ids import MenuItemId, NotificationId, OrderId, OrderLineId
from menuhub.domain.common.money import MAX_AMOUNT, Money
from menuhub.domain.notification.entities import new_order_notification
from menuhub.domain.order.entities import (
    CustomerInfo,
    FulfillmentType,
    Order,
    OrderLine,
    create_pending_order,
    new_order_number,
)
from menuhub.domain.restaurant.entities import Restaurant

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 3


class InvalidOrderError(Exception):
    def __init__(self, message: str, field: str, **details: Any) -> None:
        super().__init__(message)
        self.details = {"field": field, **details}


class RestaurantNotFoundError(Exception):
    pass


class PlaceOrder:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        order_repository: OrderRepository,
        notification_repository: NotificationRepository,
        publisher: EventPublisher,
        dispatcher: NotificationDispatcher,
        currency: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._order_repository = order_repository
        self._notification_repository = notification_repository
        self._publisher = publisher
        self._dispatcher = dispatcher
        self._currency = currency
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self,
        request_dto: PlaceOrderRequest,
        trace_ctx: TraceContext,
    ) -> PlacedOrderResponse:
        try:
            fulfillment_type, customer, lines = self._validate(request_dto)
        except InvalidOrderError as exc:
            record_order_rejected(reason=str(exc.details["field"]))
            raise

        restaurant = self._restaurant_repository.get_by_slug(request_dto.restaurant_slug)
        if restaurant is None or not restaurant.is_active:
            record_order_rejected(reason="restaurant")
            raise RestaurantNotFoundError(
                f"restaurant not found for slug={request_dto.restaurant_slug}"
            )

        order = self._persist_order(
            restaurant=restaurant,
            fulfillment_type=fulfillment_type,
            customer=customer,
            lines=lines,
            notes=(request_dto.notes or "").strip() or None,
        )
        logger.info(
            "order_placed",
            extra={
                "restaurant_id": str(order.restaurant_id),
                "order_id": str(order.order_id),
                "order_number": order.order_number,
            },
        )

        self._notification_repository.add(
            new_order_notification(
                notification_id=NotificationId(f"ntf_{uuid4().hex[:12]}"),
                restaurant_id=order.restaurant_id,
                order_id=order.order_id,
                order_number=order.order_number,
                now=order.created_at,
            )
        )

        record_order_placed(order)
        self._publish_placed(order, trace_ctx)
        self._dispatch(restaurant, order)
        return to_placed_order_response(order)

    def _validate(
        self,
        request_dto: PlaceOrderRequest,
    ) -> tuple[FulfillmentType, CustomerInfo, list[OrderLine]]:
        if not request_dto.items:
            raise InvalidOrderError("order must contain at least one item", field="items")

        total = 0
        for index, item in enumerate(request_dto.items):
            if not item.name.strip():
                raise InvalidOrderError(
                    "item name must be non-empty", field="items.name", index=index
                )
            if item.quantity < 1:
                raise InvalidOrderError(
                    "quantity must be >= 1", field="items.quantity", index=index
                )
            if item.quantity > MAX_AMOUNT:
                raise InvalidOrderError(
                    f"quantity must be <= {MAX_AMOUNT}", field="items.quantity", index=index
                )
            if item.unit_price < 0:
                raise InvalidOrderError(
                    "unit price must be >= 0", field="items.unitPrice", index=index
                )
            if item.unit_price > MAX_AMOUNT:
                raise InvalidOrderError(
                    f"unit price must be <= {MAX_AMOUNT}", field="items.unitPrice", index=index
                )
            total += item.quantity * item.unit_price
        if total > MAX_AMOUNT:
            raise InvalidOrderError(f"order total must be <= {MAX_AMOUNT}", field="total")

        customer_info = request_dto.customer_info
        phone = (customer_info.phone or "").strip()
        if not phone:
            raise InvalidOrderError("customer phone is required", field="customerInfo.phone")
        try:
            fulfillment_type = FulfillmentType(customer_info.type)
        except ValueError as exc:
            allowed = ", ".join(kind.value for kind in FulfillmentType)
            raise InvalidOrderError(
                f"order type must be one of: {allowed}", field="customerInfo.type"
            ) from exc

        customer = CustomerInfo(
            phone=phone,
            name=(customer_info.name or "").strip() or None,
            address=(customer_info.address or "").strip() or None,
        )
        lines: list[OrderLine] = []
        for item in request_dto.items:
            unit_price = Money(amount=item.unit_price, currency=self._currency)
            lines.append(
                OrderLine(
                    line_id=OrderLineId(f"orl_{uuid4().hex[:12]}"),
                    name=item.name.strip(),
                    quantity=item.quantity,
                    unit_price=unit_price,
                    line_total=unit_price.times(item.quantity),
                    item_id=MenuItemId(item.item_id) if item.item_id else None,
                )
            )
        return fulfillment_type, customer, lines

    def _persist_order(
        self,
        *,
        restaurant: Restaurant,
        fulfillment_type: FulfillmentType,
        customer: CustomerInfo,
        lines: list[OrderLine],
        notes: str | None,
    ) -> Order:
        now = self._clock()
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            order = create_pending_order(
                order_id=OrderId(f"ord_{uuid4().hex[:12]}"),
                restaurant_id=restaurant.restaurant_id,
                order_number=new_order_number(now),
                fulfillment_type=fulfillment_type,
                customer=customer,
                lines=lines,
                now=now,
                notes=notes,
            )
            try:
                self._order_repository.add(order)
                return order
            except DuplicateOrderNumberError:
                logger.warning(
                    "order_number_collision",
                    extra={
                        "order_number": order.order_number,
                        "restaurant_id": str(restaurant.restaurant_id),
                    },
                )
        raise DuplicateOrderNumberError(
            f"no unique order number after {ORDER_NUMBER_ATTEMPTS} attempts"
        )

    def _publish_placed(self, order: Order, trace_ctx: TraceContext) -> None:
        message = serialize_order_event(
            event_type="order.placed",
            occurred_at=order.created_at,
            order=order,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(
                channel=events_channel(str(order.restaurant_id)),
                message=message,
            )
        except Exception:
            logger.warning(
                "event_publish_failed",
                exc_info=True,
                extra={"order_id": str(order.order_id), "restaurant_id": str(order.restaurant_id)},
            )

    def _dispatch(self, restaurant: Restaurant, order: Order) -> None:
        if restaurant.telegram is None:
            return
        try:
            self._dispatcher.dispatch(restaurant.telegram, render_order_message(restaurant, order))
        except Exception:
            logger.exception(
                "notification_dispatch_failed",
                extra={"order_id": str(order.order_id), "restaurant_id": str(order.restaurant_id)},
            )
