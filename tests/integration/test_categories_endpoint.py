"""Integration tests for category endpoints."""

from __future__ import annotations

from fastapi import status

from aisle.catalog import DEFAULT_CATEGORIES
from aisle.server import deps
from tests.factories import make_category
from tests.integration.utils import auth_headers, category_id, create_product


def test_categories_seeded_on_startup(client):
    response = client.get("/categories")
    assert response.status_code == status.HTTP_200_OK
    names = [category["name"] for category in response.json()]
    assert sorted(names) == sorted(seed.name for seed in DEFAULT_CATEGORIES)
    assert names == sorted(names)


def test_suggest_endpoint_prefers_longest_keyword(client):
    response = client.get("/categories/suggest", params={"name": "Claw HAMMER"})
    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["category"]["name"] == "Tools"
    assert payload["matched_keyword"] == "hammer"
    assert payload["unit"] == "pcs"


def test_suggest_endpoint_returns_null_without_match(client):
    assert client.get("/categories/suggest", params={"name": "xyzzy123"}).json() is None
    assert client.get("/categories/suggest", params={"name": "   "}).json() is None


def test_suggest_endpoint_uses_dependency_override(app, client):
    app.dependency_overrides[deps.get_suggestion_categories] = lambda: lambda: [
        make_category(1, "Stub", ["widget"], "box")
    ]

    payload = client.get("/categories/suggest", params={"name": "blue widget"}).json()
    assert payload["category"]["name"] == "Stub"
    assert payload["unit"] == "box"


def test_category_crud(client):
    response = client.post(
        "/categories",
        json={"name": "Pet Food", "keywords": ["Kibble", "cat food"], "default_unit": "kg"},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["keywords"] == ["kibble", "cat food"]

    response = client.put(
        f"/categories/{created['id']}",
        json={"keywords": ["dog food"]},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["keywords"] == ["dog food"]
    assert response.json()["default_unit"] == "kg"

    response = client.delete(f"/categories/{created['id']}", headers=auth_headers())
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/categories/{created['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_update_category_requires_fields(client):
    dairy_id = category_id(client, "Dairy")
    response = client.put(f"/categories/{dairy_id}", json={}, headers=auth_headers())
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_category_uncategorizes_products(client):
    product = create_product(client, "Whole milk")
    dairy_id = category_id(client, "Dairy")
    assert product["category_id"] == dairy_id

    client.delete(f"/categories/{dairy_id}", headers=auth_headers())

    assert client.get(f"/products/{product['id']}").json()["category_id"] is None


def test_missing_category_returns_404(client):
    response = client.delete("/categories/9999", headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Category 9999 not found"
