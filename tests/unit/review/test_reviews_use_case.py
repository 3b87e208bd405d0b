from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from menuhub.application.dto.requests import AddReviewRequest
from menuhub.application.use_cases.reviews import (
    AddReview,
    InvalidReviewError,
    ListReviews,
    ReviewedRestaurantNotFoundError,
)
from menuhub.domain.common.ids import RestaurantId
from menuhub.domain.review.entities import RatingAggregate, aggregate_ratings

RESTAURANT_ID = RestaurantId("rst_001")


def _review(rating: int, user_name: str = "Zainab", comment: str = "Lovely") -> AddReviewRequest:
    return AddReviewRequest.model_validate(
        {"userName": user_name, "rating": rating, "comment": comment}
    )


def test_aggregate_rounds_half_up_to_one_decimal() -> None:
    assert aggregate_ratings([]) == RatingAggregate(rating=0.0, review_count=0)
    assert aggregate_ratings([5]) == RatingAggregate(rating=5.0, review_count=1)
    assert aggregate_ratings([5, 4]) == RatingAggregate(rating=4.5, review_count=2)
    assert aggregate_ratings([4, 4, 5]) == RatingAggregate(rating=4.3, review_count=3)
    # 4.25 rounds up, not to even
    assert aggregate_ratings([4, 4, 4, 5]).rating == 4.3
    assert aggregate_ratings([1, 2, 2]).rating == 1.7


def test_add_review_recomputes_rating_from_all_reviews(restaurants, reviews) -> None:
    use_case = AddReview(restaurant_repository=restaurants, review_repository=reviews)

    use_case.execute(RESTAURANT_ID, _review(5))
    restaurant = restaurants.get(RESTAURANT_ID)
    assert (restaurant.rating, restaurant.review_count) == (5.0, 1)

    use_case.execute(RESTAURANT_ID, _review(3, user_name="Omar"))
    restaurant = restaurants.get(RESTAURANT_ID)
    assert (restaurant.rating, restaurant.review_count) == (4.0, 2)


@pytest.mark.parametrize(
    ("request_dto", "field"),
    [
        (_review(0), "rating"),
        (_review(6), "rating"),
        (_review(4, user_name="  "), "userName"),
        (_review(4, comment=""), "comment"),
    ],
)
def test_add_review_validation(restaurants, reviews, request_dto, field) -> None:
    with pytest.raises(InvalidReviewError) as exc_info:
        AddReview(restaurant_repository=restaurants, review_repository=reviews).execute(
            RESTAURANT_ID, request_dto
        )

    assert exc_info.value.details == {"field": field}
    assert reviews.reviews == []
    assert restaurants.get(RESTAURANT_ID).review_count == 0


def test_add_review_unknown_restaurant(restaurants, reviews) -> None:
    with pytest.raises(ReviewedRestaurantNotFoundError):
        AddReview(restaurant_repository=restaurants, review_repository=reviews).execute(
            RestaurantId("rst_404"), _review(4)
        )


def test_list_reviews_newest_first(restaurants, reviews) -> None:
    use_case = AddReview(restaurant_repository=restaurants, review_repository=reviews)
    use_case.execute(RESTAURANT_ID, _review(5, user_name="First"))
    use_case.execute(RESTAURANT_ID, _review(2, user_name="Second"))

    result = ListReviews(restaurant_repository=restaurants, review_repository=reviews).execute(
        RESTAURANT_ID
    )

    assert [review.userName for review in result] == ["Second", "First"]
