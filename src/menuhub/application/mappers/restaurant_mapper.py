from __future__ import annotations

from menuhub.application.dto.responses import (
    NotificationResponse,
    RestaurantResponse,
    ReviewResponse,
)
from menuhub.domain.notification.entities import Notification
from menuhub.domain.restaurant.entities import Restaurant
from menuhub.domain.review.entities import Review


def to_restaurant_response(restaurant: Restaurant) -> RestaurantResponse:
    return RestaurantResponse(
        id=str(restaurant.restaurant_id),
        slug=restaurant.slug,
        name=restaurant.name,
        logo=restaurant.logo,
        phone=restaurant.phone,
        address=restaurant.address,
        rating=restaurant.rating,
        reviewCount=restaurant.review_count,
        isActive=restaurant.is_active,
        telegramConfigured=restaurant.telegram is not None,
        createdAt=restaurant.created_at,
    )


def to_review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.review_id),
        restaurantId=str(review.restaurant_id),
        userName=review.user_name,
        rating=review.rating,
        comment=review.comment,
        createdAt=review.created_at,
    )


def to_notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=str(notification.notification_id),
        restaurantId=str(notification.restaurant_id),
        orderId=str(notification.order_id),
        message=notification.message,
        type=notification.kind.value,
        isRead=notification.is_read,
        createdAt=notification.created_at,
    )
