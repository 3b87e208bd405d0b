from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from menuhub.api.middleware.request_id import get_request_id
from menuhub.application.ports.repositories import DuplicateOrderNumberError
from menuhub.application.use_cases.get_menu import MenuNotFoundError
from menuhub.application.use_cases.manage_menu import (
    InvalidMenuItemError,
    MenuItemNotFoundError,
    MenuRestaurantNotFoundError,
)
from menuhub.application.use_cases.notifications import (
    ForbiddenTenantError,
    NotificationNotFoundError,
    NotificationRestaurantNotFoundError,
)
from menuhub.application.use_cases.order_status import (
    InvalidOrderStatusError,
    InvalidOrderTransitionError,
    OrderNotFoundError,
    RestaurantOrdersNotFoundError,
)
from menuhub.application.use_cases.place_order import InvalidOrderError
from menuhub.application.use_cases.place_order import (
    RestaurantNotFoundError as PlaceOrderRestaurantNotFoundError,
)
from menuhub.application.use_cases.register_restaurant import (
    InvalidCredentialsError,
    InvalidRestaurantError,
    RestaurantAlreadyExistsError,
)
from menuhub.application.use_cases.restaurants import RestaurantNotFoundError
from menuhub.application.use_cases.reviews import (
    InvalidReviewError,
    ReviewedRestaurantNotFoundError,
)

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
        headers=headers,
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    return _error_response(
        status_code=http_exc.status_code,
        code=_HTTP_ERROR_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        message=message,
        headers=getattr(http_exc, "headers", None),
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


async def _store_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("store_error", exc_info=exc)
    return _error_response(
        status_code=500,
        code="STORE_ERROR",
        message=str(getattr(exc, "orig", None) or exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (InvalidRestaurantError, 400, "INVALID_RESTAURANT"),
        (RestaurantAlreadyExistsError, 400, "RESTAURANT_ALREADY_EXISTS"),
        (InvalidCredentialsError, 401, "INVALID_CREDENTIALS"),
        (RestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (PlaceOrderRestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (MenuRestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (RestaurantOrdersNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (ReviewedRestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (NotificationRestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (InvalidMenuItemError, 400, "INVALID_MENU_ITEM"),
        (InvalidOrderError, 400, "INVALID_ORDER"),
        (InvalidOrderStatusError, 400, "INVALID_ORDER_STATUS"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (DuplicateOrderNumberError, 500, "STORE_ERROR"),
        (InvalidReviewError, 400, "INVALID_REVIEW"),
        (NotificationNotFoundError, 404, "NOTIFICATION_NOT_FOUND"),
        (ForbiddenTenantError, 403, "FORBIDDEN"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _store_exception_handler)
