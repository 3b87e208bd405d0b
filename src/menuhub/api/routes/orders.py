from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, status

from menuhub.api.background import BackgroundNotificationDispatcher
from menuhub.api.dependencies import currency, status_policy, trace_context
from menuhub.application.dto.requests import PlaceOrderRequest, UpdateOrderStatusRequest
from menuhub.application.dto.responses import OrderResponse, PlacedOrderResponse
from menuhub.application.use_cases.context import TraceContext
from menuhub.application.use_cases.order_status import ListOrders, UpdateOrderStatus
from menuhub.application.use_cases.place_order import PlaceOrder
from menuhub.domain.common.ids import OrderId
from menuhub.infrastructure.db.repositories.notification_repo import (
    SqlAlchemyNotificationRepository,
)
from menuhub.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from menuhub.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from menuhub.infrastructure.messaging.redis_publisher import RedisEventPublisher
from menuhub.infrastructure.notifications.telegram import TelegramNotificationDispatcher

router = APIRouter()


def _place_order_use_case(background_tasks: BackgroundTasks) -> PlaceOrder:
    return PlaceOrder(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        notification_repository=SqlAlchemyNotificationRepository(),
        publisher=RedisEventPublisher(),
        dispatcher=BackgroundNotificationDispatcher(
            inner=TelegramNotificationDispatcher(),
            background_tasks=background_tasks,
        ),
        currency=currency(),
    )


def _update_order_status_use_case() -> UpdateOrderStatus:
    return UpdateOrderStatus(
        order_repository=SqlAlchemyOrderRepository(),
        publisher=RedisEventPublisher(),
        policy=status_policy(),
    )


@router.post(
    "/v1/orders",
    response_model=PlacedOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    request_dto: PlaceOrderRequest,
    background_tasks: BackgroundTasks,
    trace_ctx: TraceContext = Depends(trace_context),
) -> PlacedOrderResponse:
    use_case = _place_order_use_case(background_tasks)
    return use_case.execute(request_dto=request_dto, trace_ctx=trace_ctx)


@router.get("/v1/orders/{slug}", response_model=list[OrderResponse])
def list_orders(slug: str) -> list[OrderResponse]:
    use_case = ListOrders(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        order_repository=SqlAlchemyOrderRepository(),
    )
    return use_case.execute(slug)


@router.patch("/v1/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    request_dto: UpdateOrderStatusRequest,
    trace_ctx: TraceContext = Depends(trace_context),
) -> OrderResponse:
    return _update_order_status_use_case().execute(
        order_id=OrderId(order_id),
        status=request_dto.status,
        trace_ctx=trace_ctx,
    )
