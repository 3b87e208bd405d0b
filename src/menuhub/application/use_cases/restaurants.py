from __future__ import annotations

import logging

from menuhub.application.dto.responses import RestaurantResponse, StatsResponse
from menuhub.application.mappers.restaurant_mapper import to_restaurant_response
from menuhub.application.ports.repositories import ReviewRepository, RestaurantRepository
from menuhub.domain.common.ids import RestaurantId
from menuhub.domain.restaurant.entities import Restaurant

logger = logging.getLogger(__name__)


class RestaurantNotFoundError(Exception):
    pass


def find_restaurant(repository: RestaurantRepository, key: str) -> Restaurant | None:
    """Resolve a restaurant by id first, then by slug."""
    restaurant = repository.get(RestaurantId(key))
    if restaurant is None:
        restaurant = repository.get_by_slug(key)
    return restaurant


class GetRestaurant:
    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        self._restaurant_repository = restaurant_repository

    def execute(self, key: str) -> RestaurantResponse:
        restaurant = find_restaurant(self._restaurant_repository, key)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {key} not found")
        return to_restaurant_response(restaurant)


class ListRestaurants:
    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        self._restaurant_repository = restaurant_repository

    def execute(self, search: str | None = None) -> list[RestaurantResponse]:
        term = search.strip() if search else None
        restaurants = self._restaurant_repository.list_active(search=term or None)
        return [to_restaurant_response(restaurant) for restaurant in restaurants]


class SetRestaurantActive:
    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        self._restaurant_repository = restaurant_repository

    def execute(self, restaurant_id: RestaurantId, active: bool) -> RestaurantResponse:
        restaurant = self._restaurant_repository.set_active(restaurant_id, active)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        logger.info(
            "restaurant_active_changed",
            extra={"restaurant_id": str(restaurant_id), "active": active},
        )
        return to_restaurant_response(restaurant)


class DeleteRestaurant:
    """Hard delete; menu items, orders, notifications and reviews go with it."""

    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        self._restaurant_repository = restaurant_repository

    def execute(self, restaurant_id: RestaurantId) -> None:
        if not self._restaurant_repository.delete(restaurant_id):
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        logger.info("restaurant_deleted", extra={"restaurant_id": str(restaurant_id)})


class GetStats:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        review_repository: ReviewRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._review_repository = review_repository

    def execute(self) -> StatsResponse:
        return StatsResponse(
            totalRestaurants=self._restaurant_repository.count(),
            totalReviews=self._review_repository.count(),
        )
