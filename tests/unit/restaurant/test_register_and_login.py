from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from menuhub.application.dto.requests import LoginRequest, RegisterRestaurantRequest
from menuhub.application.use_cases.register_restaurant import (
    InvalidCredentialsError,
    InvalidRestaurantError,
    Login,
    RegisterRestaurant,
    RestaurantAlreadyExistsError,
)


class RecordingTokenIssuer:
    def __init__(self) -> None:
        self.issued: list[tuple[str, dict]] = []

    def issue(self, subject: str, claims: dict) -> str:
        self.issued.append((subject, claims))
        return f"token-for-{subject}"

    def decode(self, token: str) -> dict | None:
        return None


def _register_request(**overrides) -> RegisterRestaurantRequest:
    payload = {
        "name": "Samad Grill",
        "slug": "samad-grill",
        "username": "samad",
        "password": "grill-2026",
        "phone": "+964 780 000 1111",
        "telegramBotToken": "555:xyz",
        "telegramChatId": "-100555",
    }
    payload.update(overrides)
    return RegisterRestaurantRequest.model_validate(payload)


def test_register_hashes_password_and_configures_telegram(restaurants, hasher) -> None:
    result = RegisterRestaurant(restaurant_repository=restaurants, password_hasher=hasher).execute(
        _register_request()
    )

    stored = restaurants.get_by_slug("samad-grill")
    assert stored is not None
    assert result.id == str(stored.restaurant_id)
    assert stored.password_hash == "hashed:grill-2026"
    assert stored.telegram is not None
    assert stored.telegram.chat_id == "-100555"
    assert result.telegramConfigured is True
    assert result.rating == 0.0
    assert result.reviewCount == 0
    assert result.isActive is True


def test_register_duplicate_slug_leaves_existing_tenant_untouched(restaurants, hasher) -> None:
    before = restaurants.get_by_slug("al-bait")

    with pytest.raises(RestaurantAlreadyExistsError):
        RegisterRestaurant(restaurant_repository=restaurants, password_hasher=hasher).execute(
            _register_request(slug="al-bait", username="someone-else", name="Impostor")
        )

    assert restaurants.get_by_slug("al-bait") == before
    assert restaurants.count() == 1


def test_register_duplicate_username_is_rejected(restaurants, hasher) -> None:
    with pytest.raises(RestaurantAlreadyExistsError):
        RegisterRestaurant(restaurant_repository=restaurants, password_hasher=hasher).execute(
            _register_request(username="owner-al-bait")
        )


def test_register_rejects_short_password_and_bad_slug(restaurants, hasher) -> None:
    use_case = RegisterRestaurant(restaurant_repository=restaurants, password_hasher=hasher)

    with pytest.raises(InvalidRestaurantError) as exc_info:
        use_case.execute(_register_request(password="123"))
    assert exc_info.value.details == {"field": "password"}

    with pytest.raises(InvalidRestaurantError):
        use_case.execute(_register_request(slug="Samad Grill"))

    assert restaurants.count() == 1


def test_login_issues_token_with_tenant_claims(restaurants, hasher) -> None:
    issuer = RecordingTokenIssuer()

    result = Login(
        restaurant_repository=restaurants,
        password_hasher=hasher,
        token_issuer=issuer,
    ).execute(
        LoginRequest.model_validate(
            {"username": "owner-al-bait", "password": "secret-pass", "restaurantSlug": "al-bait"}
        )
    )

    assert result.token == "token-for-rst_001"
    assert result.restaurant.slug == "al-bait"
    assert issuer.issued == [("rst_001", {"username": "owner-al-bait", "slug": "al-bait"})]


@pytest.mark.parametrize(
    ("username", "password", "slug"),
    [
        ("owner-al-bait", "wrong-pass", "al-bait"),
        ("nobody", "secret-pass", "al-bait"),
        ("owner-al-bait", "secret-pass", "other-slug"),
    ],
)
def test_login_rejects_bad_credentials(restaurants, hasher, username, password, slug) -> None:
    issuer = RecordingTokenIssuer()

    with pytest.raises(InvalidCredentialsError):
        Login(
            restaurant_repository=restaurants,
            password_hasher=hasher,
            token_issuer=issuer,
        ).execute(LoginRequest(username=username, password=password, restaurant_slug=slug))

    assert issuer.issued == []
