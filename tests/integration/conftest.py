from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from menuhub.infrastructure.db import session as db_session
from menuhub.infrastructure.db.models.registry import metadata
from menuhub.infrastructure.messaging import redis_client

DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture(scope="session", autouse=True)
def integration_environment() -> Iterator[None]:
    os.environ["DATABASE_URL"] = DATABASE_URL
    os.environ["APP_ENV"] = "test"
    os.environ["MENUHUB_CURRENCY"] = "IQD"
    os.environ.pop("REDIS_URL", None)
    os.environ.pop("JWT_SECRET", None)
    os.environ.pop("ORDER_STATUS_POLICY", None)
    os.environ.setdefault("OTEL_SERVICE_NAME", "menuhub-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    db_session._build_engine.cache_clear()
    redis_client._build_client.cache_clear()

    metadata.create_all(db_session.get_engine())
    yield
    metadata.drop_all(db_session.get_engine())
    db_session._build_engine.cache_clear()


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = db_session.get_engine()
    yield engine
    with engine.begin() as connection:
        for table in reversed(metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def client(engine: Engine) -> TestClient:
    from menuhub.api.main import app

    return TestClient(app)


@pytest.fixture
def register(client: TestClient):
    def _register(slug: str = "al-bait", **overrides) -> dict:
        payload = {
            "name": "Al Bait",
            "slug": slug,
            "username": f"owner-{slug}",
            "password": "secret-pass",
            "phone": "+964 770 111 2222",
            "address": "Karrada, Baghdad",
        }
        payload.update(overrides)
        response = client.post("/v1/restaurants", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login(client: TestClient):
    def _login(slug: str = "al-bait", password: str = "secret-pass") -> str:
        response = client.post(
            "/v1/auth/login",
            json={"username": f"owner-{slug}", "password": password, "restaurantSlug": slug},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login
