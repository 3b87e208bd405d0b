from __future__ import annotations

from fastapi import APIRouter, status

from menuhub.application.dto.requests import AddReviewRequest
from menuhub.application.dto.responses import ReviewResponse
from menuhub.application.use_cases.reviews import AddReview, ListReviews
from menuhub.domain.common.ids import RestaurantId
from menuhub.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from menuhub.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository

router = APIRouter()


@router.post(
    "/v1/restaurants/{restaurant_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_review(restaurant_id: str, request_dto: AddReviewRequest) -> ReviewResponse:
    use_case = AddReview(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        review_repository=SqlAlchemyReviewRepository(),
    )
    return use_case.execute(RestaurantId(restaurant_id), request_dto)


@router.get("/v1/restaurants/{restaurant_id}/reviews", response_model=list[ReviewResponse])
def list_reviews(restaurant_id: str) -> list[ReviewResponse]:
    use_case = ListReviews(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        review_repository=SqlAlchemyReviewRepository(),
    )
    return use_case.execute(RestaurantId(restaurant_id))
