"""Security-related integration tests."""

from __future__ import annotations

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from aisle.config import get_settings
from aisle.db.repository import reset_repository_state
from aisle.server.app import create_app


@pytest.fixture()
def secure_client(tmp_path, monkeypatch) -> TestClient:
    db_path = tmp_path / "secure.db"
    monkeypatch.setenv("AISLE_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("AISLE_API_TOKEN", "secret-token")
    get_settings.cache_clear()
    reset_repository_state()
    app = create_app()
    with TestClient(app) as client:
        yield client
    monkeypatch.delenv("AISLE_API_TOKEN", raising=False)
    reset_repository_state()
    get_settings.cache_clear()


def test_mutations_require_api_token(secure_client):
    payload = {"name": "Whole milk", "amount": 1}

    response = secure_client.post("/products", json=payload)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = secure_client.post(
        "/products",
        json=payload,
        headers={"Authorization": "Bearer wrong-token"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = secure_client.post(
        "/products",
        json=payload,
        headers={"Authorization": "Bearer secret-token"},
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_api_key_header_is_accepted(secure_client):
    response = secure_client.post(
        "/shopping-lists",
        json={"name": "Weekly"},
        headers={"X-API-Key": "secret-token"},
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_reads_do_not_require_api_token(secure_client):
    assert secure_client.get("/categories").status_code == status.HTTP_200_OK
    assert secure_client.get("/shopping-lists").status_code == status.HTTP_200_OK


def test_deletes_require_api_token(secure_client):
    response = secure_client.delete("/categories/1")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert secure_client.get("/categories/1").status_code == status.HTTP_200_OK
