"""Unit tests for the store repository helpers."""

from __future__ import annotations

import pytest

from aisle.catalog import default_category_names
from aisle.db.categories import create_category, list_categories, seed_default_categories
from aisle.db.stores import (
    add_store_category,
    create_store,
    delete_store,
    get_store,
    list_store_categories,
    list_stores,
    remove_store_category,
    reorder_store_categories,
    update_store,
)
from aisle.exceptions import EntityNotFoundError, InvalidEntityError


def _store(**overrides):
    payload = {
        "name": "Mega Image",
        "store_type": "grocery",
        "latitude": 44.43,
        "longitude": 26.10,
    }
    payload.update(overrides)
    return create_store(**payload)


def test_new_store_gets_default_categories_for_its_type():
    seed_default_categories()

    store = _store(store_type="pharmacy")

    names = [category.name for category in list_store_categories(store.id)]
    assert names == list(default_category_names("pharmacy"))


def test_new_store_without_seeded_categories_starts_empty():
    store = _store()
    assert store.category_order == []


def test_explicit_category_order_is_kept():
    first = create_category(name="First")
    second = create_category(name="Second")

    store = _store(category_order=[second.id, first.id])

    assert store.category_order == [second.id, first.id]


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"store_type": "bookshop"},
        {"latitude": 120.0},
        {"longitude": -181.0},
        {"category_order": [1, 2, 1]},
    ],
)
def test_create_store_rejects_invalid_input(overrides):
    with pytest.raises(InvalidEntityError):
        _store(**overrides)
    assert list_stores() == []


def test_list_stores_filters_by_type():
    _store(name="Dedeman", store_type="hardware")
    _store(name="Auchan")

    assert [store.name for store in list_stores()] == ["Auchan", "Dedeman"]
    assert [store.name for store in list_stores("hardware")] == ["Dedeman"]


def test_update_store_location_and_type():
    store = _store(address="Main St 1")

    updated = update_store(store.id, latitude=45.0, store_type="convenience")

    assert updated.type == "convenience"
    assert updated.location.latitude == 45.0
    assert updated.location.longitude == store.location.longitude
    assert updated.location.address == "Main St 1"


def test_add_remove_and_reorder_categories():
    dairy = create_category(name="Dairy")
    produce = create_category(name="Produce")
    store = _store(category_order=[])

    store = add_store_category(store.id, dairy.id)
    store = add_store_category(store.id, produce.id)
    store = add_store_category(store.id, dairy.id)
    assert store.category_order == [dairy.id, produce.id]

    store = reorder_store_categories(store.id, [produce.id, dairy.id])
    assert [c.name for c in list_store_categories(store.id)] == ["Produce", "Dairy"]

    store = remove_store_category(store.id, produce.id)
    assert get_store(store.id).category_order == [dairy.id]


def test_reorder_rejects_duplicates_and_keeps_previous_order():
    dairy = create_category(name="Dairy")
    store = _store(category_order=[dairy.id])

    with pytest.raises(InvalidEntityError):
        reorder_store_categories(store.id, [dairy.id, dairy.id])

    assert get_store(store.id).category_order == [dairy.id]


def test_add_unknown_category_raises():
    store = _store()
    with pytest.raises(EntityNotFoundError):
        add_store_category(store.id, 404)


def test_delete_store_keeps_categories():
    seed_default_categories()
    store = _store()

    delete_store(store.id)

    assert get_store(store.id) is None
    assert list_categories()
    with pytest.raises(EntityNotFoundError):
        delete_store(store.id)
