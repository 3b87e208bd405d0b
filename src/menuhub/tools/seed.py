from __future__ import annotations

import os
from datetime import datetime, timezone

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from menuhub.infrastructure.db.models.registry import MenuItemModel, RestaurantModel
from menuhub.infrastructure.db.session import get_engine
from menuhub.infrastructure.security.passwords import BcryptPasswordHasher

DEMO_RESTAURANT_ID = "rst_demo000001"
DEMO_SLUG = "demo-kitchen"

DEMO_ITEMS = [
    {
        "id": "itm_demo000001",
        "name": "Chicken Shawarma",
        "description": "Garlic sauce, pickles, saj bread",
        "price": 4500,
        "category": "Sandwiches",
    },
    {
        "id": "itm_demo000002",
        "name": "Falafel Wrap",
        "description": "Tahini, tomato, parsley",
        "price": 2500,
        "category": "Sandwiches",
    },
    {
        "id": "itm_demo000003",
        "name": "Masgouf Plate",
        "description": "Grilled carp, rice, salad",
        "price": 18000,
        "category": "Mains",
    },
    {
        "id": "itm_demo000004",
        "name": "Kleicha",
        "description": "Date-filled cookies",
        "price": 3000,
        "category": "Desserts",
    },
]


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    required_tables = {"restaurants", "menu_items"}
    if not required_tables.issubset(set(inspect(engine).get_table_names())):
        print("no schema yet")
        return

    currency = os.getenv("MENUHUB_CURRENCY", "IQD").upper()
    password = os.getenv("SEED_OWNER_PASSWORD", "demo-password")
    now = datetime.now(timezone.utc)

    with Session(engine) as session:
        session.merge(
            RestaurantModel(
                id=DEMO_RESTAURANT_ID,
                slug=DEMO_SLUG,
                name="Demo Kitchen",
                username="demo",
                password_hash=BcryptPasswordHasher().hash(password),
                phone="+964 770 000 0000",
                address="Karrada, Baghdad",
                is_active=True,
                rating=0.0,
                review_count=0,
                created_at=now,
            )
        )
        for item in DEMO_ITEMS:
            session.merge(
                MenuItemModel(
                    restaurant_id=DEMO_RESTAURANT_ID,
                    currency=currency,
                    image=None,
                    available=True,
                    created_at=now,
                    **item,
                )
            )
        session.commit()

    print(f"seeded restaurant slug={DEMO_SLUG} with {len(DEMO_ITEMS)} menu items")


if __name__ == "__main__":
    main()
