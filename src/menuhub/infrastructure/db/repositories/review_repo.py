from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session

from menuhub.application.ports.repositories import ReviewRepository
from menuhub.domain.common.ids import RestaurantId, ReviewId
from menuhub.domain.review.entities import Review
from menuhub.infrastructure.db.models.registry import ReviewModel
from menuhub.infrastructure.db.session import get_engine


class SqlAlchemyReviewRepository(ReviewRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, review: Review) -> None:
        model = ReviewModel(
            id=str(review.review_id),
            restaurant_id=str(review.restaurant_id),
            user_name=review.user_name,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()

    def list_for_restaurant(self, restaurant_id: RestaurantId) -> list[Review]:
        statement = (
            select(ReviewModel)
            .where(ReviewModel.restaurant_id == str(restaurant_id))
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [self._to_domain(model) for model in models]

    def ratings_for_restaurant(self, restaurant_id: RestaurantId) -> list[int]:
        statement = select(ReviewModel.rating).where(
            ReviewModel.restaurant_id == str(restaurant_id)
        )
        with Session(self._engine) as session:
            return list(session.execute(statement).scalars().all())

    def count(self) -> int:
        with Session(self._engine) as session:
            return session.execute(select(func.count()).select_from(ReviewModel)).scalar_one()

    def _to_domain(self, model: ReviewModel) -> Review:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Review(
            review_id=ReviewId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            user_name=model.user_name,
            rating=model.rating,
            comment=model.comment,
            created_at=created_at,
        )
