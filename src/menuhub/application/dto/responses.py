from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class RestaurantResponse(BaseModel):
    id: str
    slug: str
    name: str
    logo: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float
    reviewCount: int
    isActive: bool
    telegramConfigured: bool
    createdAt: datetime


class LoginResponse(BaseModel):
    token: str
    restaurant: RestaurantResponse


class MenuItemResponse(BaseModel):
    id: str
    restaurantId: str
    name: str
    description: str | None = None
    price: int
    currency: str
    category: str
    image: str | None = None
    available: bool
    createdAt: datetime


class OrderLineResponse(BaseModel):
    lineId: str
    itemId: str | None = None
    name: str
    unitPrice: int
    quantity: int
    lineTotal: int


class CustomerResponse(BaseModel):
    name: str | None = None
    phone: str
    address: str | None = None


class OrderResponse(BaseModel):
    id: str
    restaurantId: str
    orderNumber: str
    status: str
    type: str
    customer: CustomerResponse
    lines: list[OrderLineResponse] = Field(default_factory=list)
    total: int
    currency: str
    notes: str | None = None
    createdAt: datetime
    updatedAt: datetime


class PlacedOrderResponse(BaseModel):
    id: str
    orderNumber: str
    total: int
    status: str


class ReviewResponse(BaseModel):
    id: str
    restaurantId: str
    userName: str
    rating: int
    comment: str
    createdAt: datetime


class NotificationResponse(BaseModel):
    id: str
    restaurantId: str
    orderId: str
    message: str
    type: str
    isRead: bool
    createdAt: datetime


class StatsResponse(BaseModel):
    totalRestaurants: int
    totalReviews: int
