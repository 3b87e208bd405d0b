from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import Session

from menuhub.application.ports.repositories import MenuItemRepository
from menuhub.domain.common.ids import MenuItemId, RestaurantId
from menuhub.domain.common.money import Money
from menuhub.domain.menu.entities import MenuItem
from menuhub.infrastructure.db.models.registry import MenuItemModel
from menuhub.infrastructure.db.session import get_engine


class SqlAlchemyMenuItemRepository(MenuItemRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, item: MenuItem) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(item))
            session.commit()

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, str(item_id))
            return self._to_domain(model) if model is not None else None

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[MenuItem]:
        statement = (
            select(MenuItemModel)
            .where(MenuItemModel.restaurant_id == str(restaurant_id))
            .order_by(MenuItemModel.category, MenuItemModel.name, MenuItemModel.id)
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [self._to_domain(model) for model in models]

    def update(self, item: MenuItem) -> None:
        statement = (
            update(MenuItemModel)
            .where(MenuItemModel.id == str(item.item_id))
            .values(
                name=item.name,
                description=item.description,
                price=item.price.amount,
                currency=item.price.currency,
                category=item.category,
                image=item.image,
                available=item.available,
            )
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def set_availability(self, item_id: MenuItemId, available: bool) -> MenuItem | None:
        statement = (
            update(MenuItemModel)
            .where(MenuItemModel.id == str(item_id))
            .values(available=available)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
        return self.get(item_id)

    def delete(self, item_id: MenuItemId) -> bool:
        with Session(self._engine) as session:
            result = session.execute(delete(MenuItemModel).where(MenuItemModel.id == str(item_id)))
            session.commit()
        return result.rowcount == 1

    def _to_model(self, item: MenuItem) -> MenuItemModel:
        return MenuItemModel(
            id=str(item.item_id),
            restaurant_id=str(item.restaurant_id),
            name=item.name,
            description=item.description,
            price=item.price.amount,
            currency=item.price.currency,
            category=item.category,
            image=item.image,
            available=item.available,
            created_at=item.created_at,
        )

    def _to_domain(self, model: MenuItemModel) -> MenuItem:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return MenuItem(
            item_id=MenuItemId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            name=model.name,
            price=Money(amount=model.price, currency=model.currency),
            category=model.category,
            created_at=created_at,
            description=model.description,
            image=model.image,
            available=model.available,
        )
