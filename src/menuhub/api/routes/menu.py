from __future__ import annotations

from fastapi import APIRouter, Response, status

from menuhub.api.dependencies import currency
from menuhub.application.dto.requests import (
    CreateMenuItemRequest,
    SetAvailabilityRequest,
    UpdateMenuItemRequest,
)
from menuhub.application.dto.responses import MenuItemResponse
from menuhub.application.use_cases.get_menu import GetMenu
from menuhub.application.use_cases.manage_menu import (
    CreateMenuItem,
    DeleteMenuItem,
    SetMenuItemAvailability,
    UpdateMenuItem,
)
from menuhub.domain.common.ids import MenuItemId
from menuhub.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuItemRepository
from menuhub.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository

router = APIRouter()


def _get_menu_use_case() -> GetMenu:
    return GetMenu(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_item_repository=SqlAlchemyMenuItemRepository(),
    )


def _create_menu_item_use_case() -> CreateMenuItem:
    return CreateMenuItem(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_item_repository=SqlAlchemyMenuItemRepository(),
        currency=currency(),
    )


@router.get("/v1/menu/{slug}", response_model=list[MenuItemResponse])
def get_menu(slug: str) -> list[MenuItemResponse]:
    return _get_menu_use_case().execute(slug)


@router.post(
    "/v1/menu",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(request_dto: CreateMenuItemRequest) -> MenuItemResponse:
    return _create_menu_item_use_case().execute(request_dto)


@router.patch("/v1/menu/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: str, request_dto: UpdateMenuItemRequest) -> MenuItemResponse:
    use_case = UpdateMenuItem(SqlAlchemyMenuItemRepository())
    return use_case.execute(MenuItemId(item_id), request_dto)


@router.patch("/v1/menu/{item_id}/availability", response_model=MenuItemResponse)
def set_menu_item_availability(
    item_id: str,
    request_dto: SetAvailabilityRequest,
) -> MenuItemResponse:
    use_case = SetMenuItemAvailability(SqlAlchemyMenuItemRepository())
    return use_case.execute(MenuItemId(item_id), available=request_dto.available)


@router.delete("/v1/menu/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(item_id: str) -> Response:
    DeleteMenuItem(SqlAlchemyMenuItemRepository()).execute(MenuItemId(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
