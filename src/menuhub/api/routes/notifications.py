from __future__ import annotations

from fastapi import APIRouter, Depends

from menuhub.api.dependencies import Owner, current_owner
from menuhub.application.dto.requests import MarkNotificationReadRequest
from menuhub.application.dto.responses import NotificationResponse
from menuhub.application.use_cases.notifications import ListNotifications, MarkNotificationRead
from menuhub.domain.common.ids import NotificationId
from menuhub.infrastructure.db.repositories.notification_repo import (
    SqlAlchemyNotificationRepository,
)
from menuhub.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository

router = APIRouter()


@router.get(
    "/v1/restaurants/{slug}/notifications",
    response_model=list[NotificationResponse],
)
def list_notifications(
    slug: str,
    unread: bool = False,
    owner: Owner = Depends(current_owner),
) -> list[NotificationResponse]:
    use_case = ListNotifications(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        notification_repository=SqlAlchemyNotificationRepository(),
    )
    return use_case.execute(slug, owner_restaurant_id=owner.restaurant_id, unread_only=unread)


@router.patch("/v1/notifications/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: str,
    request_dto: MarkNotificationReadRequest,
    owner: Owner = Depends(current_owner),
) -> NotificationResponse:
    use_case = MarkNotificationRead(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        notification_repository=SqlAlchemyNotificationRepository(),
    )
    return use_case.execute(
        NotificationId(notification_id),
        owner_restaurant_id=owner.restaurant_id,
        read=request_dto.read,
    )
