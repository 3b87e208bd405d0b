from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menuhub.application.ports.repositories import DuplicateRestaurantError, RestaurantRepository
from menuhub.domain.common.ids import RestaurantId
from menuhub.domain.restaurant.entities import Restaurant, telegram_target
from menuhub.infrastructure.db.models.registry import RestaurantModel
from menuhub.infrastructure.db.session import get_engine


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add_if_unique(self, restaurant: Restaurant) -> None:
        conflict_statement = (
            select(RestaurantModel.slug, RestaurantModel.username)
            .where(
                or_(
                    RestaurantModel.slug == restaurant.slug,
                    RestaurantModel.username == restaurant.username,
                )
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            existing = session.execute(conflict_statement).first()
            if existing is not None:
                raise DuplicateRestaurantError(_conflict_message(restaurant, existing.slug))

            session.add(self._to_model(restaurant))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateRestaurantError(
                    f"restaurant slug={restaurant.slug} or username is already taken"
                ) from exc

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        with Session(self._engine) as session:
            model = session.get(RestaurantModel, str(restaurant_id))
            return self._to_domain(model) if model is not None else None

    def get_by_slug(self, slug: str) -> Restaurant | None:
        statement = select(RestaurantModel).where(RestaurantModel.slug == slug).limit(1)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return self._to_domain(model) if model is not None else None

    def get_by_username_and_slug(self, username: str, slug: str) -> Restaurant | None:
        statement = (
            select(RestaurantModel)
            .where(RestaurantModel.username == username, RestaurantModel.slug == slug)
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return self._to_domain(model) if model is not None else None

    def list_active(self, search: str | None = None) -> list[Restaurant]:
        statement = select(RestaurantModel).where(RestaurantModel.is_active.is_(True))
        if search:
            statement = statement.where(RestaurantModel.name.ilike(f"%{search}%"))
        statement = statement.order_by(RestaurantModel.created_at.desc(), RestaurantModel.id.desc())
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [self._to_domain(model) for model in models]

    def set_active(self, restaurant_id: RestaurantId, active: bool) -> Restaurant | None:
        statement = (
            update(RestaurantModel)
            .where(RestaurantModel.id == str(restaurant_id))
            .values(is_active=active)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
        return self.get(restaurant_id)

    def update_rating(
        self,
        restaurant_id: RestaurantId,
        rating: float,
        review_count: int,
    ) -> None:
        statement = (
            update(RestaurantModel)
            .where(RestaurantModel.id == str(restaurant_id))
            .values(rating=rating, review_count=review_count)
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def delete(self, restaurant_id: RestaurantId) -> bool:
        with Session(self._engine) as session:
            model = session.get(RestaurantModel, str(restaurant_id))
            if model is None:
                return False
            # ORM cascade removes menu items, orders (with lines), notifications and reviews
            session.delete(model)
            session.commit()
        return True

    def count(self) -> int:
        with Session(self._engine) as session:
            return session.execute(select(func.count()).select_from(RestaurantModel)).scalar_one()

    def _to_model(self, restaurant: Restaurant) -> RestaurantModel:
        telegram = restaurant.telegram
        return RestaurantModel(
            id=str(restaurant.restaurant_id),
            slug=restaurant.slug,
            name=restaurant.name,
            logo=restaurant.logo,
            username=restaurant.username,
            password_hash=restaurant.password_hash,
            phone=restaurant.phone,
            address=restaurant.address,
            telegram_bot_token=telegram.bot_token if telegram else None,
            telegram_chat_id=telegram.chat_id if telegram else None,
            is_active=restaurant.is_active,
            rating=restaurant.rating,
            review_count=restaurant.review_count,
            created_at=restaurant.created_at,
        )

    def _to_domain(self, model: RestaurantModel) -> Restaurant:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Restaurant(
            restaurant_id=RestaurantId(model.id),
            slug=model.slug,
            name=model.name,
            username=model.username,
            password_hash=model.password_hash,
            created_at=created_at,
            logo=model.logo,
            phone=model.phone,
            address=model.address,
            telegram=telegram_target(model.telegram_bot_token, model.telegram_chat_id),
            is_active=model.is_active,
            rating=float(model.rating),
            review_count=model.review_count,
        )


def _conflict_message(restaurant: Restaurant, existing_slug: str) -> str:
    if existing_slug == restaurant.slug:
        return f"restaurant slug={restaurant.slug} is already taken"
    return f"username={restaurant.username} is already taken"
