from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictInt


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class RegisterRestaurantRequest(CamelBaseModel):
    name: str
    slug: str
    username: str
    password: str
    phone: str | None = None
    address: str | None = None
    logo: str | None = None
    telegram_bot_token: str | None = None
    telegram_chat_id: str | None = None


class LoginRequest(CamelBaseModel):
    username: str
    password: str
    restaurant_slug: str


class SetRestaurantActiveRequest(CamelBaseModel):
    active: bool


class CreateMenuItemRequest(CamelBaseModel):
    restaurant_id: str
    name: str
    price: StrictInt
    category: str
    description: str | None = None
    image: str | None = None
    available: bool = True


class UpdateMenuItemRequest(CamelBaseModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = None
    description: str | None = None
    price: StrictInt | None = None
    category: str | None = None
    image: str | None = None
    available: bool | None = None


class SetAvailabilityRequest(CamelBaseModel):
    available: bool


class OrderItemRequest(CamelBaseModel):
    name: str
    unit_price: StrictInt
    quantity: StrictInt
    item_id: str | None = None


class CustomerInfoRequest(CamelBaseModel):
    phone: str | None = None
    name: str | None = None
    address: str | None = None
    type: str


class PlaceOrderRequest(CamelBaseModel):
    restaurant_slug: str
    items: list[OrderItemRequest]
    customer_info: CustomerInfoRequest
    notes: str | None = None


class UpdateOrderStatusRequest(CamelBaseModel):
    status: str


class AddReviewRequest(CamelBaseModel):
    user_name: str
    rating: StrictInt
    comment: str


class MarkNotificationReadRequest(CamelBaseModel):
    read: bool = True
