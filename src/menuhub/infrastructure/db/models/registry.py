"""Imports every mapped class so relationship names resolve and metadata is complete."""

from __future__ import annotations

from menuhub.infrastructure.db.models.menu import MenuItemModel
from menuhub.infrastructure.db.models.notification import NotificationModel
from menuhub.infrastructure.db.models.order import OrderLineModel, OrderModel
from menuhub.infrastructure.db.models.restaurant import Base, RestaurantModel
from menuhub.infrastructure.db.models.review import ReviewModel

metadata = Base.metadata

__all__ = [
    "Base",
    "MenuItemModel",
    "NotificationModel",
    "OrderLineModel",
    "OrderModel",
    "RestaurantModel",
    "ReviewModel",
    "metadata",
]
