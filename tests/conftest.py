from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'users.sqlite3'}",
        LOG_LEVEL="WARNING",
        LOG_JSON=True,
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """TestClient running the real lifespan against a temporary SQLite database."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_user(client: TestClient):
    def _create(**fields) -> dict:
        payload = {"name": "John Doe", "email": "john@example.com", **fields}
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
