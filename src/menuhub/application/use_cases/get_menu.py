from __future__ import annotations

from menuhub.application.dto.responses import MenuItemResponse
from menuhub.application.mappers.menu_mapper import to_menu_response
from menuhub.application.ports.repositories import MenuItemRepository, RestaurantRepository


class MenuNotFoundError(Exception):
    pass


class GetMenu:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_item_repository: MenuItemRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_item_repository = menu_item_repository

    def execute(self, slug: str) -> list[MenuItemResponse]:
        restaurant = self._restaurant_repository.get_by_slug(slug)
        if restaurant is None:
            raise MenuNotFoundError(f"menu not found for slug={slug}")

        items = self._menu_item_repository.list_for_restaurant(restaurant.restaurant_id)
        return to_menu_response(items)
