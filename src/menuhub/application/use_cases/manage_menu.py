from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from menuhub.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from menuhub.application.dto.responses import MenuItemResponse
from menuhub.application.mappers.menu_mapper import to_menu_item_response
from menuhub.application.ports.repositories import MenuItemRepository, RestaurantRepository
from menuhub.domain.common.ids import MenuItemId, RestaurantId
from menuhub.domain.common.money import Money
from menuhub.domain.menu.entities import MenuItem


class MenuItemNotFoundError(Exception):
    pass


class MenuRestaurantNotFoundError(Exception):
    pass


class InvalidMenuItemError(Exception):
    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.details = {"field": field} if field else {}


def _price(amount: int, currency: str) -> Money:
    try:
        return Money(amount=amount, currency=currency)
    except ValueError as exc:
        raise InvalidMenuItemError(str(exc), field="price") from exc


class CreateMenuItem:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_item_repository: MenuItemRepository,
        currency: str,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_item_repository = menu_item_repository
        self._currency = currency

    def execute(self, request_dto: CreateMenuItemRequest) -> MenuItemResponse:
        price = _price(request_dto.price, self._currency)
        restaurant_id = RestaurantId(request_dto.restaurant_id)
        if self._restaurant_repository.get(restaurant_id) is None:
            raise MenuRestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        try:
            item = MenuItem(
                item_id=MenuItemId(f"itm_{uuid4().hex[:12]}"),
                restaurant_id=restaurant_id,
                name=request_dto.name.strip(),
                price=price,
                category=request_dto.category.strip(),
                created_at=datetime.now(timezone.utc),
                description=request_dto.description,
                image=request_dto.image,
                available=request_dto.available,
            )
        except ValueError as exc:
            raise InvalidMenuItemError(str(exc)) from exc

        self._menu_item_repository.add(item)
        return to_menu_item_response(item)


class UpdateMenuItem:
    def __init__(self, menu_item_repository: MenuItemRepository) -> None:
        self._menu_item_repository = menu_item_repository

    def execute(self, item_id: MenuItemId, request_dto: UpdateMenuItemRequest) -> MenuItemResponse:
        item = self._menu_item_repository.get(item_id)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")

        changes = request_dto.model_dump(exclude_unset=True)
        for field in ("name", "category", "price", "available"):
            if field in changes and changes[field] is None:
                raise InvalidMenuItemError(f"{field} cannot be null", field=field)
        if "price" in changes:
            changes["price"] = _price(changes["price"], item.price.currency)
        for field in ("name", "category"):
            if field in changes:
                changes[field] = changes[field].strip()

        try:
            updated = replace(item, **changes)
        except ValueError as exc:
            raise InvalidMenuItemError(str(exc)) from exc

        self._menu_item_repository.update(updated)
        return to_menu_item_response(updated)


class SetMenuItemAvailability:
    def __init__(self, menu_item_repository: MenuItemRepository) -> None:
        self._menu_item_repository = menu_item_repository

    def execute(self, item_id: MenuItemId, available: bool) -> MenuItemResponse:
        item = self._menu_item_repository.set_availability(item_id, available)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        return to_menu_item_response(item)


class DeleteMenuItem:
    def __init__(self, menu_item_repository: MenuItemRepository) -> None:
        self._menu_item_repository = menu_item_repository

    def execute(self, item_id: MenuItemId) -> None:
        if not self._menu_item_repository.delete(item_id):
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
