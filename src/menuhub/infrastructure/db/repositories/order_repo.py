from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from menuhub.application.ports.repositories import DuplicateOrderNumberError, OrderRepository
from menuhub.domain.common.ids import MenuItemId, OrderId, OrderLineId, RestaurantId
from menuhub.domain.common.money import Money
from menuhub.domain.order.entities import (
    CustomerInfo,
    FulfillmentType,
    Order,
    OrderLine,
    OrderStatus,
)
from menuhub.infrastructure.db.models.registry import OrderLineModel, OrderModel
from menuhub.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> None:
        number_taken = (
            select(OrderModel.id).where(OrderModel.order_number == order.order_number).limit(1)
        )
        with Session(self._engine) as session:
            session.add(self._to_model(order))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                if session.execute(number_taken).first() is not None:
                    raise DuplicateOrderNumberError(
                        f"order number {order.order_number} already exists"
                    ) from None
                raise

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.lines))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return self._to_domain(model) if model is not None else None

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Order]:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.lines))
            .where(OrderModel.restaurant_id == str(restaurant_id))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [self._to_domain(model) for model in models]

    def update_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None:
        statement = (
            update(OrderModel)
            .where(OrderModel.id == str(order_id))
            .values(status=status.value, updated_at=updated_at)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
        return self.get(order_id)

    def _to_model(self, order: Order) -> OrderModel:
        order_model = OrderModel(
            id=str(order.order_id),
            restaurant_id=str(order.restaurant_id),
            order_number=order.order_number,
            status=order.status.value,
            fulfillment_type=order.fulfillment_type.value,
            customer_name=order.customer.name,
            customer_phone=order.customer.phone,
            customer_address=order.customer.address,
            total=order.total.amount,
            currency=order.total.currency,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        order_model.lines = [
            OrderLineModel(
                id=str(line.line_id),
                order_id=str(order.order_id),
                position=position,
                item_id=str(line.item_id) if line.item_id else None,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price.amount,
                line_total=line.line_total.amount,
            )
            for position, line in enumerate(order.lines)
        ]
        return order_model

    def _to_domain(self, model: OrderModel) -> Order:
        lines = [
            OrderLine(
                line_id=OrderLineId(line.id),
                name=line.name,
                quantity=line.quantity,
                unit_price=Money(amount=line.unit_price, currency=model.currency),
                line_total=Money(amount=line.line_total, currency=model.currency),
                item_id=MenuItemId(line.item_id) if line.item_id else None,
            )
            for line in model.lines
        ]
        return Order(
            order_id=OrderId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            order_number=model.order_number,
            status=OrderStatus(model.status),
            fulfillment_type=FulfillmentType(model.fulfillment_type),
            customer=CustomerInfo(
                phone=model.customer_phone,
                name=model.customer_name,
                address=model.customer_address,
            ),
            lines=lines,
            total=Money(amount=model.total, currency=model.currency),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
            notes=model.notes,
        )


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
