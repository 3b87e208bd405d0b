from __future__ import annotations

from menuhub.application.dto.responses import NotificationResponse
from menuhub.application.mappers.restaurant_mapper import to_notification_response
from menuhub.application.ports.repositories import NotificationRepository, RestaurantRepository
from menuhub.domain.common.ids import NotificationId


class NotificationNotFoundError(Exception):
    pass


class NotificationRestaurantNotFoundError(Exception):
    pass


class ForbiddenTenantError(Exception):
    pass


class ListNotifications:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        notification_repository: NotificationRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._notification_repository = notification_repository

    def execute(
        self,
        slug: str,
        owner_restaurant_id: str,
        unread_only: bool = False,
    ) -> list[NotificationResponse]:
        restaurant = self._restaurant_repository.get_by_slug(slug)
        if restaurant is None:
            raise NotificationRestaurantNotFoundError(f"restaurant not found for slug={slug}")
        if str(restaurant.restaurant_id) != owner_restaurant_id:
            raise ForbiddenTenantError("token does not grant access to this restaurant")

        notifications = self._notification_repository.list_for_restaurant(
            restaurant.restaurant_id,
            unread_only=unread_only,
        )
        return [to_notification_response(notification) for notification in notifications]


class MarkNotificationRead:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        notification_repository: NotificationRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._notification_repository = notification_repository

    def execute(
        self,
        notification_id: NotificationId,
        owner_restaurant_id: str,
        read: bool = True,
    ) -> NotificationResponse:
        notification = self._notification_repository.get(notification_id)
        if notification is None:
            raise NotificationNotFoundError(f"notification {notification_id} not found")

        restaurant = self._restaurant_repository.get(notification.restaurant_id)
        if restaurant is None or str(restaurant.restaurant_id) != owner_restaurant_id:
            raise ForbiddenTenantError("token does not grant access to this notification")

        updated = self._notification_repository.set_read(notification_id, read)
        if updated is None:
            raise NotificationNotFoundError(f"notification {notification_id} not found")
        return to_notification_response(updated)
