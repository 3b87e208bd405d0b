from __future__ import annotations

from fastapi import APIRouter, Response, status

from menuhub.application.dto.requests import (
    LoginRequest,
    RegisterRestaurantRequest,
    SetRestaurantActiveRequest,
)
from menuhub.application.dto.responses import LoginResponse, RestaurantResponse, StatsResponse
from menuhub.application.use_cases.register_restaurant import Login, RegisterRestaurant
from menuhub.application.use_cases.restaurants import (
    DeleteRestaurant,
    GetRestaurant,
    GetStats,
    ListRestaurants,
    SetRestaurantActive,
)
from menuhub.domain.common.ids import RestaurantId
from menuhub.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from menuhub.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository
from menuhub.infrastructure.security.passwords import BcryptPasswordHasher
from menuhub.infrastructure.security.tokens import JoseTokenIssuer

router = APIRouter()


def _register_use_case() -> RegisterRestaurant:
    return RegisterRestaurant(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        password_hasher=BcryptPasswordHasher(),
    )


def _login_use_case() -> Login:
    return Login(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        password_hasher=BcryptPasswordHasher(),
        token_issuer=JoseTokenIssuer(),
    )


@router.post(
    "/v1/restaurants",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_restaurant(request_dto: RegisterRestaurantRequest) -> RestaurantResponse:
    return _register_use_case().execute(request_dto)


@router.post("/v1/auth/login", response_model=LoginResponse)
def login(request_dto: LoginRequest) -> LoginResponse:
    return _login_use_case().execute(request_dto)


@router.get("/v1/restaurants", response_model=list[RestaurantResponse])
def list_restaurants(search: str | None = None) -> list[RestaurantResponse]:
    return ListRestaurants(SqlAlchemyRestaurantRepository()).execute(search=search)


@router.get("/v1/restaurants/{key}", response_model=RestaurantResponse)
def get_restaurant(key: str) -> RestaurantResponse:
    return GetRestaurant(SqlAlchemyRestaurantRepository()).execute(key)


@router.patch("/v1/restaurants/{restaurant_id}/active", response_model=RestaurantResponse)
def set_restaurant_active(
    restaurant_id: str,
    request_dto: SetRestaurantActiveRequest,
) -> RestaurantResponse:
    use_case = SetRestaurantActive(SqlAlchemyRestaurantRepository())
    return use_case.execute(RestaurantId(restaurant_id), active=request_dto.active)


@router.delete("/v1/restaurants/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(restaurant_id: str) -> Response:
    DeleteRestaurant(SqlAlchemyRestaurantRepository()).execute(RestaurantId(restaurant_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/v1/stats", response_model=StatsResponse)
def stats() -> StatsResponse:
    use_case = GetStats(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        review_repository=SqlAlchemyReviewRepository(),
    )
    return use_case.execute()
