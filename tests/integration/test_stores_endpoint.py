"""Integration tests for store endpoints and store views."""

from __future__ import annotations

from fastapi import status

from aisle.catalog import default_category_names
from tests.integration.utils import auth_headers, category_id, create_product, create_store


def test_store_starts_with_type_default_categories(client):
    store = create_store(client, store_type="hardware")

    response = client.get(f"/stores/{store['id']}/categories")
    assert response.status_code == status.HTTP_200_OK
    assert [c["name"] for c in response.json()] == list(default_category_names("hardware"))


def test_list_stores_by_type(client):
    create_store(client, name="Dedeman", store_type="hardware")
    create_store(client, name="Catena", store_type="pharmacy")

    response = client.get("/stores", params={"type": "pharmacy"})
    assert [store["name"] for store in response.json()] == ["Catena"]

    response = client.get("/stores", params={"type": "bookshop"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_store_validation(client):
    response = client.post(
        "/stores",
        json={"name": "Nowhere", "type": "grocery", "latitude": 95, "longitude": 0},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.post(
        "/stores",
        json={
            "name": "Dupes",
            "type": "grocery",
            "latitude": 0,
            "longitude": 0,
            "category_order": [1, 1],
        },
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_store(client):
    store = create_store(client)

    response = client.put(
        f"/stores/{store['id']}",
        json={"type": "convenience", "address": "Str. Lipscani 1"},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_200_OK
    updated = response.json()
    assert updated["type"] == "convenience"
    assert updated["location"]["address"] == "Str. Lipscani 1"
    assert updated["category_order"] == store["category_order"]


def test_store_category_order_mutations(client):
    dairy_id = category_id(client, "Dairy")
    produce_id = category_id(client, "Produce")
    tools_id = category_id(client, "Tools")
    store = create_store(client, category_order=[dairy_id])

    response = client.post(
        f"/stores/{store['id']}/categories",
        json={"category_id": produce_id},
        headers=auth_headers(),
    )
    assert response.json()["category_order"] == [dairy_id, produce_id]

    response = client.put(
        f"/stores/{store['id']}/categories",
        json={"category_order": [produce_id, dairy_id, tools_id]},
        headers=auth_headers(),
    )
    assert response.json()["category_order"] == [produce_id, dairy_id, tools_id]

    response = client.put(
        f"/stores/{store['id']}/categories",
        json={"category_order": [produce_id, produce_id]},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.delete(
        f"/stores/{store['id']}/categories/{tools_id}", headers=auth_headers()
    )
    assert response.json()["category_order"] == [produce_id, dairy_id]

    response = client.post(
        f"/stores/{store['id']}/categories",
        json={"category_id": 9999},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_store_view_groups_products_in_aisle_order(client):
    store = create_store(client)
    create_product(client, "Whole milk")
    create_product(client, "Banana")
    create_product(client, "Avocado")
    create_product(client, "Claw hammer")

    response = client.get(f"/stores/{store['id']}/view")
    assert response.status_code == status.HTTP_200_OK
    view = response.json()

    assert [group["category_name"] for group in view["groups"]] == ["Produce", "Dairy"]
    assert [p["name"] for p in view["groups"][0]["products"]] == ["Avocado", "Banana"]
    assert view["total_product_count"] == 3
    assert view["checked_product_count"] == 0


def test_store_view_for_one_list_counts_checked_items(client):
    store = create_store(client)
    milk = create_product(client, "Whole milk")
    banana = create_product(client, "Banana")
    create_product(client, "Sourdough bread")
    shopping_list = client.post(
        "/shopping-lists",
        json={"name": "Weekly", "product_ids": [milk["id"], banana["id"]]},
        headers=auth_headers(),
    ).json()
    client.post(
        f"/shopping-lists/{shopping_list['id']}/items/{banana['id']}/toggle",
        headers=auth_headers(),
    )

    view = client.get(
        f"/stores/{store['id']}/view", params={"list_id": shopping_list["id"]}
    ).json()

    assert [group["category_name"] for group in view["groups"]] == ["Produce", "Dairy"]
    assert view["total_product_count"] == 2
    assert view["checked_product_count"] == 1

    response = client.get(f"/stores/{store['id']}/view", params={"list_id": 9999})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_store_shopping_view_reports_progress(client):
    store = create_store(client)
    milk = create_product(client, "Whole milk")
    hammer = create_product(client, "Claw hammer")
    weekly = client.post(
        "/shopping-lists",
        json={"name": "Weekly", "product_ids": [milk["id"]]},
        headers=auth_headers(),
    ).json()
    client.post(
        "/shopping-lists",
        json={"name": "DIY", "product_ids": [hammer["id"]]},
        headers=auth_headers(),
    )
    client.post(
        f"/shopping-lists/{weekly['id']}/items/{milk['id']}/toggle",
        headers=auth_headers(),
    )

    view = client.get(f"/stores/{store['id']}/shopping").json()

    assert [section["list_name"] for section in view["sections"]] == ["Weekly"]
    assert view["total_items"] == 1
    assert view["completed_items"] == 1
    assert view["progress"] == 1.0


def test_missing_store_returns_404(client):
    assert client.get("/stores/9999").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/stores/9999/view").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/stores/9999/categories").status_code == status.HTTP_404_NOT_FOUND
    response = client.delete("/stores/9999", headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND
