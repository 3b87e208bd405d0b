from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from menuhub.application.dto.requests import LoginRequest, RegisterRestaurantRequest
from menuhub.application.dto.responses import LoginResponse, RestaurantResponse
from menuhub.application.mappers.restaurant_mapper import to_restaurant_response
from menuhub.application.ports.repositories import DuplicateRestaurantError, RestaurantRepository
from menuhub.application.ports.security import PasswordHasher, TokenIssuer
from menuhub.domain.common.ids import RestaurantId
from menuhub.domain.restaurant.entities import Restaurant, telegram_target

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class InvalidRestaurantError(Exception):
    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.details = {"field": field} if field else {}


class RestaurantAlreadyExistsError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass


class RegisterRestaurant:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._password_hasher = password_hasher

    def execute(self, request_dto: RegisterRestaurantRequest) -> RestaurantResponse:
        if len(request_dto.password) < MIN_PASSWORD_LENGTH:
            raise InvalidRestaurantError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        try:
            restaurant = Restaurant(
                restaurant_id=RestaurantId(f"rst_{uuid4().hex[:12]}"),
                slug=request_dto.slug.strip(),
                name=request_dto.name.strip(),
                username=request_dto.username.strip(),
                password_hash=self._password_hasher.hash(request_dto.password),
                created_at=datetime.now(timezone.utc),
                logo=request_dto.logo,
                phone=request_dto.phone,
                address=request_dto.address,
                telegram=telegram_target(
                    request_dto.telegram_bot_token,
                    request_dto.telegram_chat_id,
                ),
            )
        except ValueError as exc:
            raise InvalidRestaurantError(str(exc)) from exc

        try:
            self._restaurant_repository.add_if_unique(restaurant)
        except DuplicateRestaurantError as exc:
            raise RestaurantAlreadyExistsError(str(exc)) from exc

        logger.info("restaurant_registered", extra={"restaurant_id": str(restaurant.restaurant_id)})
        return to_restaurant_response(restaurant)


class Login:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    def execute(self, request_dto: LoginRequest) -> LoginResponse:
        restaurant = self._restaurant_repository.get_by_username_and_slug(
            username=request_dto.username,
            slug=request_dto.restaurant_slug,
        )
        if restaurant is None or not self._password_hasher.verify(
            request_dto.password, restaurant.password_hash
        ):
            raise InvalidCredentialsError("invalid username or password")

        token = self._token_issuer.issue(
            subject=str(restaurant.restaurant_id),
            claims={"username": restaurant.username, "slug": restaurant.slug},
        )
        return LoginResponse(token=token, restaurant=to_restaurant_response(restaurant))
