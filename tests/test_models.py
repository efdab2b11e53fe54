"""Validation tests for the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aisle.catalog import DEFAULT_CATEGORIES, STORE_TYPE_DEFAULT_CATEGORIES, default_category_names
from aisle.models import STORE_TYPES, Category, ProductQuantity, Store
from tests.factories import make_list, make_product, make_store


def test_category_keywords_are_lowercased_and_deduplicated():
    category = Category(id=1, name="Dairy", keywords=[" Milk", "CHEESE", "milk", ""])
    assert category.keywords == ["milk", "cheese"]


def test_category_accepts_comma_separated_keywords():
    category = Category(id=1, name="Dairy", keywords="milk, Butter ,")
    assert category.keywords == ["milk", "butter"]


@pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf")])
def test_quantity_amount_must_be_positive_and_finite(amount):
    with pytest.raises(ValidationError):
        ProductQuantity(amount=amount, unit="kg")


def test_product_name_is_trimmed_and_required():
    assert make_product(1, "  Milk ").name == "Milk"
    with pytest.raises(ValidationError):
        make_product(1, "   ")


def test_store_rejects_duplicate_category_ids():
    with pytest.raises(ValidationError):
        make_store(1, [1, 2, 1])


def test_store_rejects_unknown_type_and_bad_coordinates():
    with pytest.raises(ValidationError):
        make_store(1, [], store_type="bookshop")
    with pytest.raises(ValidationError):
        Store(
            id=1,
            name="Nowhere",
            type="grocery",
            location={"latitude": 91, "longitude": 0},
        )


def test_shopping_list_completion_and_counts():
    empty = make_list(1, "Empty")
    partial = make_list(2, "Partial", product_ids=[1, 2], checked=[1])
    done = make_list(3, "Done", product_ids=[1, 2], checked=[1, 2])

    assert not empty.is_completed
    assert (partial.item_count, partial.checked_count, partial.is_completed) == (2, 1, False)
    assert done.is_completed
    assert partial.checked_product_ids == frozenset({1})
    assert partial.item_for(2).is_checked is False
    assert partial.item_for(9) is None


def test_shopping_list_status_filter():
    partial = make_list(1, "Partial", product_ids=[1], checked=[])
    done = make_list(2, "Done", product_ids=[1], checked=[1])

    assert partial.matches_status("active") and not partial.matches_status("completed")
    assert done.matches_status("completed") and not done.matches_status("active")
    assert partial.matches_status(None) and done.matches_status(None)


def test_serialized_list_includes_computed_fields():
    payload = make_list(1, "Weekly", product_ids=[1], checked=[1]).model_dump(mode="json")
    assert payload["item_count"] == 1
    assert payload["checked_count"] == 1
    assert payload["is_completed"] is True


def test_catalog_store_defaults_reference_catalog_names():
    names = {seed.name for seed in DEFAULT_CATEGORIES}
    assert set(STORE_TYPE_DEFAULT_CATEGORIES) == set(STORE_TYPES)
    for store_type in STORE_TYPES:
        assert set(default_category_names(store_type)) <= names


def test_catalog_keywords_are_normalized():
    for seed in DEFAULT_CATEGORIES:
        assert seed.keywords
        assert all(keyword == keyword.strip().lower() for keyword in seed.keywords)
        assert len(set(seed.keywords)) == len(seed.keywords)
