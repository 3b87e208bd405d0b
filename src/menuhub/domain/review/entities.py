from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from menuhub.domain.common.ids import RestaurantId, ReviewId

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    review_id: ReviewId
    restaurant_id: RestaurantId
    user_name: str
    rating: int
    comment: str
    created_at: datetime

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        if not self.user_name.strip():
            raise ValueError("user_name must be non-empty")
        if not self.comment.strip():
            raise ValueError("comment must be non-empty")


@dataclass(frozen=True)
class RatingAggregate:
    rating: float
    review_count: int


def aggregate_ratings(ratings: Iterable[int]) -> RatingAggregate:
    """Mean of every rating, rounded half-up to one decimal place."""
    values = list(ratings)
    if not values:
        return RatingAggregate(rating=0.0, review_count=0)
    mean = Decimal(sum(values)) / Decimal(len(values))
    rounded = mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return RatingAggregate(rating=float(rounded), review_count=len(values))
