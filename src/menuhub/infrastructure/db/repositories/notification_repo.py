from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session

from menuhub.application.ports.repositories import NotificationRepository
from menuhub.domain.common.ids import NotificationId, OrderId, RestaurantId
from menuhub.domain.notification.entities import Notification, NotificationKind
from menuhub.infrastructure.db.models.registry import NotificationModel
from menuhub.infrastructure.db.session import get_engine


class SqlAlchemyNotificationRepository(NotificationRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, notification: Notification) -> None:
        model = NotificationModel(
            id=str(notification.notification_id),
            restaurant_id=str(notification.restaurant_id),
            order_id=str(notification.order_id),
            message=notification.message,
            kind=notification.kind.value,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()

    def get(self, notification_id: NotificationId) -> Notification | None:
        with Session(self._engine) as session:
            model = session.get(NotificationModel, str(notification_id))
            return self._to_domain(model) if model is not None else None

    def list_for_restaurant(
        self,
        restaurant_id: RestaurantId,
        unread_only: bool = False,
    ) -> list[Notification]:
        statement = select(NotificationModel).where(
            NotificationModel.restaurant_id == str(restaurant_id)
        )
        if unread_only:
            statement = statement.where(NotificationModel.is_read.is_(False))
        statement = statement.order_by(
            NotificationModel.created_at.desc(),
            NotificationModel.id.desc(),
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [self._to_domain(model) for model in models]

    def set_read(self, notification_id: NotificationId, read: bool) -> Notification | None:
        statement = (
            update(NotificationModel)
            .where(NotificationModel.id == str(notification_id))
            .values(is_read=read)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
        return self.get(notification_id)

    def _to_domain(self, model: NotificationModel) -> Notification:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Notification(
            notification_id=NotificationId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            order_id=OrderId(model.order_id),
            message=model.message,
            kind=NotificationKind(model.kind),
            created_at=created_at,
            is_read=model.is_read,
        )
