from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from config import ADMIN_PASSWORD
from dependencies import get_database, get_link_shortener
from main import create_app
from movie_service import MovieService
from movie_store import MovieStore
from shortlinks import LinkShortener
from tests.fakes import FakeShortlinkProvider, build_shortener


@pytest.fixture
def provider() -> FakeShortlinkProvider:
    return FakeShortlinkProvider()


@pytest.fixture
def shortener(provider: FakeShortlinkProvider) -> LinkShortener:
    return build_shortener(provider)


@pytest.fixture
def mongo_db() -> Any:
    return AsyncMongoMockClient()["filmycosmo_test"]


@pytest.fixture
def movie_store(mongo_db: Any) -> MovieStore:
    return MovieStore(mongo_db["movies"])


@pytest.fixture
def movie_service(movie_store: MovieStore, shortener: LinkShortener) -> MovieService:
    return MovieService(movie_store, shortener)


@pytest.fixture
def client(mongo_db: Any, shortener: LinkShortener) -> Iterator[TestClient]:
    app = create_app()
    app.dependency_overrides[get_database] = lambda: mongo_db
    app.dependency_overrides[get_link_shortener] = lambda: shortener
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
