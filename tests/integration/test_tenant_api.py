from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))


def _place_order(client, slug: str = "al-bait") -> dict:
    response = client.post(
        "/v1/orders",
        json={
            "restaurantSlug": slug,
            "items": [{"name": "Biryani", "unitPrice": 8000, "quantity": 1}],
            "customerInfo": {"phone": "0770", "type": "pickup"},
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_register_and_fetch_restaurant(client, register) -> None:
    created = register(telegramBotToken="123:abc", telegramChatId="-100200")

    assert created["slug"] == "al-bait"
    assert created["rating"] == 0.0
    assert created["reviewCount"] == 0
    assert created["telegramConfigured"] is True
    assert "password" not in created
    assert "passwordHash" not in created

    by_id = client.get(f"/v1/restaurants/{created['id']}")
    by_slug = client.get("/v1/restaurants/al-bait")
    assert by_id.status_code == by_slug.status_code == 200
    assert by_id.json()["id"] == by_slug.json()["id"] == created["id"]


def test_register_duplicate_slug_is_rejected(client, register) -> None:
    original = register()

    response = client.post(
        "/v1/restaurants",
        json={
            "name": "Impostor",
            "slug": "al-bait",
            "username": "impostor",
            "password": "another-pass",
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "RESTAURANT_ALREADY_EXISTS"
    assert client.get("/v1/restaurants/al-bait").json()["name"] == original["name"]


def test_register_validation_errors(client) -> None:
    short_password = client.post(
        "/v1/restaurants",
        json={"name": "X", "slug": "x-place", "username": "x", "password": "123"},
    )
    bad_slug = client.post(
        "/v1/restaurants",
        json={"name": "X", "slug": "X Place", "username": "x", "password": "123456"},
    )
    missing_fields = client.post("/v1/restaurants", json={"name": "X"})

    assert short_password.status_code == 400
    assert short_password.json()["error"]["code"] == "INVALID_RESTAURANT"
    assert bad_slug.status_code == 400
    assert missing_fields.status_code == 400
    assert missing_fields.json()["error"]["code"] == "INVALID_REQUEST"


def test_login_and_bad_credentials(client, register, login) -> None:
    register()

    token = login()
    wrong = client.post(
        "/v1/auth/login",
        json={"username": "owner-al-bait", "password": "nope-nope", "restaurantSlug": "al-bait"},
    )

    assert token.count(".") == 2
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_list_search_and_deactivate(client, register) -> None:
    first = register()
    register("samad-grill", name="Samad Grill")

    assert {r["slug"] for r in client.get("/v1/restaurants").json()} == {"al-bait", "samad-grill"}
    assert [r["slug"] for r in client.get("/v1/restaurants?search=grill").json()] == [
        "samad-grill"
    ]

    response = client.patch(f"/v1/restaurants/{first['id']}/active", json={"active": False})

    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert [r["slug"] for r in client.get("/v1/restaurants").json()] == ["samad-grill"]


def test_delete_restaurant_and_stats(client, register) -> None:
    created = register()
    client.post(
        f"/v1/restaurants/{created['id']}/reviews",
        json={"userName": "Noor", "rating": 4, "comment": "Good"},
    )
    assert client.get("/v1/stats").json() == {"totalRestaurants": 1, "totalReviews": 1}

    response = client.delete(f"/v1/restaurants/{created['id']}")

    assert response.status_code == 204
    assert client.get(f"/v1/restaurants/{created['id']}").status_code == 404
    assert client.get("/v1/stats").json() == {"totalRestaurants": 0, "totalReviews": 0}
    assert client.delete(f"/v1/restaurants/{created['id']}").status_code == 404


def test_reviews_update_rating(client, register) -> None:
    created = register()
    url = f"/v1/restaurants/{created['id']}/reviews"

    first = client.post(url, json={"userName": "Noor", "rating": 5, "comment": "Great"})
    restaurant = client.get(f"/v1/restaurants/{created['id']}").json()
    assert first.status_code == 201
    assert (restaurant["rating"], restaurant["reviewCount"]) == (5.0, 1)

    client.post(url, json={"userName": "Omar", "rating": 3, "comment": "Fine"})
    restaurant = client.get(f"/v1/restaurants/{created['id']}").json()
    assert (restaurant["rating"], restaurant["reviewCount"]) == (4.0, 2)

    reviews = client.get(url).json()
    assert {review["userName"] for review in reviews} == {"Noor", "Omar"}


def test_review_validation_and_unknown_restaurant(client, register) -> None:
    created = register()

    out_of_range = client.post(
        f"/v1/restaurants/{created['id']}/reviews",
        json={"userName": "Noor", "rating": 6, "comment": "Great"},
    )
    boolean = client.post(
        f"/v1/restaurants/{created['id']}/reviews",
        json={"userName": "Noor", "rating": True, "comment": "Great"},
    )
    unknown = client.post(
        "/v1/restaurants/rst_missing/reviews",
        json={"userName": "Noor", "rating": 5, "comment": "Great"},
    )

    assert out_of_range.status_code == 400
    assert out_of_range.json()["error"]["code"] == "INVALID_REVIEW"
    assert boolean.status_code == 400
    assert boolean.json()["error"]["code"] == "INVALID_REQUEST"
    assert unknown.status_code == 404
    assert client.get(f"/v1/restaurants/{created['id']}").json()["reviewCount"] == 0


def test_notifications_require_owner_token(client, register, login) -> None:
    register()
    register("samad-grill")
    placed = _place_order(client)

    anonymous = client.get("/v1/restaurants/al-bait/notifications")
    assert anonymous.status_code == 401
    assert anonymous.json()["error"]["code"] == "UNAUTHORIZED"

    garbage = client.get(
        "/v1/restaurants/al-bait/notifications",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert garbage.status_code == 401

    other_owner = {"Authorization": f"Bearer {login('samad-grill')}"}
    forbidden = client.get("/v1/restaurants/al-bait/notifications", headers=other_owner)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["code"] == "FORBIDDEN"

    owner = {"Authorization": f"Bearer {login()}"}
    notifications = client.get("/v1/restaurants/al-bait/notifications", headers=owner).json()
    assert len(notifications) == 1
    assert notifications[0]["message"] == f"New order #{placed['orderNumber']}"
    assert notifications[0]["orderId"] == placed["id"]
    assert notifications[0]["isRead"] is False


def test_mark_notification_read(client, register, login) -> None:
    register()
    register("samad-grill")
    _place_order(client)
    owner = {"Authorization": f"Bearer {login()}"}
    notification_id = client.get("/v1/restaurants/al-bait/notifications", headers=owner).json()[
        0
    ]["id"]

    forbidden = client.patch(
        f"/v1/notifications/{notification_id}/read",
        json={"read": True},
        headers={"Authorization": f"Bearer {login('samad-grill')}"},
    )
    assert forbidden.status_code == 403

    response = client.patch(
        f"/v1/notifications/{notification_id}/read",
        json={"read": True},
        headers=owner,
    )
    assert response.status_code == 200
    assert response.json()["isRead"] is True

    unread = client.get(
        "/v1/restaurants/al-bait/notifications?unread=true",
        headers=owner,
    ).json()
    assert unread == []

    missing = client.patch("/v1/notifications/ntf_missing/read", json={}, headers=owner)
    assert missing.status_code == 404


def test_token_of_deleted_tenant_cannot_read_reused_slug(client, register, login) -> None:
    original = register()
    stale = {"Authorization": f"Bearer {login()}"}
    assert client.delete(f"/v1/restaurants/{original['id']}").status_code == 204

    register(username="new-owner")
    _place_order(client)

    listed = client.get("/v1/restaurants/al-bait/notifications", headers=stale)
    assert listed.status_code == 403
    assert listed.json()["error"]["code"] == "FORBIDDEN"

    token = client.post(
        "/v1/auth/login",
        json={"username": "new-owner", "password": "secret-pass", "restaurantSlug": "al-bait"},
    ).json()["token"]
    owner = {"Authorization": f"Bearer {token}"}
    notification_id = client.get("/v1/restaurants/al-bait/notifications", headers=owner).json()[
        0
    ]["id"]
    marked = client.patch(
        f"/v1/notifications/{notification_id}/read",
        json={"read": True},
        headers=stale,
    )
    assert marked.status_code == 403
