"""Integration tests covering request ID propagation and middleware."""

from __future__ import annotations

from fastapi import status
from sqlalchemy.exc import OperationalError

from aisle.server import deps


def test_request_id_echoed_when_provided(client):
    request_id = "test-request-123"
    response = client.get("/categories", headers={"X-Request-ID": request_id})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == request_id


def test_request_id_generated_when_missing(client):
    response = client.get("/categories")
    assert response.status_code == 200
    generated = response.headers.get("X-Request-ID")
    assert generated
    assert len(generated) >= 8


def test_storage_failures_map_to_503(app, client):
    def _broken_provider():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    app.dependency_overrides[deps.get_category_provider] = lambda: _broken_provider

    response = client.get("/categories")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json() == {"detail": "Storage unavailable"}
