"""Shared helpers for integration tests."""

from __future__ import annotations

from aisle.config import get_settings


def auth_headers() -> dict[str, str]:
    token = get_settings().api_token
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def category_id(client, name: str) -> int:
    for category in client.get("/categories").json():
        if category["name"] == name:
            return category["id"]
    raise AssertionError(f"category {name!r} not seeded")


def create_product(client, name: str, **extra) -> dict:
    payload = {"name": name, "amount": 1}
    payload.update(extra)
    response = client.post("/products", json=payload, headers=auth_headers())
    assert response.status_code == 201, response.text
    return response.json()


def create_store(client, name: str = "Mega Image", store_type: str = "grocery", **extra) -> dict:
    payload = {"name": name, "type": store_type, "latitude": 44.43, "longitude": 26.1}
    payload.update(extra)
    response = client.post("/stores", json=payload, headers=auth_headers())
    assert response.status_code == 201, response.text
    return response.json()
