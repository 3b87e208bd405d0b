from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from menuhub.application.dto.requests import AddReviewRequest
from menuhub.application.dto.responses import ReviewResponse
from menuhub.application.mappers.restaurant_mapper import to_review_response
from menuhub.application.metrics.order_lifecycle import record_review_added
from menuhub.application.ports.repositories import RestaurantRepository, ReviewRepository
from menuhub.domain.common.ids import RestaurantId, ReviewId
from menuhub.domain.review.entities import MAX_RATING, MIN_RATING, Review, aggregate_ratings

logger = logging.getLogger(__name__)


class InvalidReviewError(Exception):
    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.details = {"field": field}


class ReviewedRestaurantNotFoundError(Exception):
    pass


class AddReview:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        review_repository: ReviewRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._review_repository = review_repository

    def execute(self, restaurant_id: RestaurantId, request_dto: AddReviewRequest) -> ReviewResponse:
        if not request_dto.user_name.strip():
            raise InvalidReviewError("userName is required", field="userName")
        if not request_dto.comment.strip():
            raise InvalidReviewError("comment is required", field="comment")
        if not MIN_RATING <= request_dto.rating <= MAX_RATING:
            raise InvalidReviewError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}", field="rating"
            )

        if self._restaurant_repository.get(restaurant_id) is None:
            raise ReviewedRestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        review = Review(
            review_id=ReviewId(f"rev_{uuid4().hex[:12]}"),
            restaurant_id=restaurant_id,
            user_name=request_dto.user_name.strip(),
            rating=request_dto.rating,
            comment=request_dto.comment.strip(),
            created_at=datetime.now(timezone.utc),
        )
        self._review_repository.add(review)

        # Full recomputation over every stored rating, O(n) per review.
        aggregate = aggregate_ratings(self._review_repository.ratings_for_restaurant(restaurant_id))
        self._restaurant_repository.update_rating(
            restaurant_id,
            rating=aggregate.rating,
            review_count=aggregate.review_count,
        )
        record_review_added(review.rating)
        logger.info("review_added", extra={"restaurant_id": str(restaurant_id)})
        return to_review_response(review)


class ListReviews:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        review_repository: ReviewRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._review_repository = review_repository

    def execute(self, restaurant_id: RestaurantId) -> list[ReviewResponse]:
        if self._restaurant_repository.get(restaurant_id) is None:
            raise ReviewedRestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        reviews = self._review_repository.list_for_restaurant(restaurant_id)
        return [to_review_response(review) for review in reviews]
