from __future__ import annotations

from menuhub.application.dto.responses import MenuItemResponse
from menuhub.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=str(item.item_id),
        restaurantId=str(item.restaurant_id),
        name=item.name,
        description=item.description,
        price=item.price.amount,
        currency=item.price.currency,
        category=item.category,
        image=item.image,
        available=item.available,
        createdAt=item.created_at,
    )


def to_menu_response(items: list[MenuItem]) -> list[MenuItemResponse]:
    return [to_menu_item_response(item) for item in items]
