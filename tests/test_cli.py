"""Tests for the typer command-line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from aisle.catalog import DEFAULT_CATEGORIES
from aisle.cli import app
from aisle.db.categories import count_categories, list_categories, seed_default_categories
from aisle.db.products import create_product
from aisle.db.shopping_lists import create_shopping_list, toggle_product_checked
from aisle.db.stores import create_store

runner = CliRunner()


def test_seed_command_is_idempotent():
    first = runner.invoke(app, ["seed"])
    second = runner.invoke(app, ["seed"])

    assert first.exit_code == 0
    assert f"Seeded {len(DEFAULT_CATEGORIES)} categories." in first.stdout
    assert "nothing seeded" in second.stdout
    assert count_categories() == len(DEFAULT_CATEGORIES)


def test_suggest_command_outputs_json():
    seed_default_categories()

    result = runner.invoke(app, ["suggest", "Claw hammer"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["category"]["name"] == "Tools"
    assert payload["matched_keyword"] == "hammer"


def test_suggest_command_fails_without_match():
    seed_default_categories()

    result = runner.invoke(app, ["suggest", "xyzzy123"])

    assert result.exit_code == 1


def test_store_view_command_for_a_list():
    seed_default_categories()
    category_ids = {category.name: category.id for category in list_categories()}
    store = create_store(name="Mega Image", store_type="grocery", latitude=44.4, longitude=26.1)
    milk = create_product(name="Milk", amount=1, unit="L", category_id=category_ids["Dairy"])
    banana = create_product(name="Banana", amount=1, unit="kg", category_id=category_ids["Produce"])
    create_product(name="Bread", amount=1, unit="pcs", category_id=category_ids["Bakery"])
    shopping_list = create_shopping_list(name="Weekly", product_ids=[milk.id, banana.id])
    toggle_product_checked(shopping_list.id, banana.id)

    result = runner.invoke(app, ["store-view", str(store.id), "--list-id", str(shopping_list.id)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["store_id"] == store.id
    assert [group["category_name"] for group in payload["groups"]] == ["Produce", "Dairy"]
    assert payload["total_product_count"] == 2
    assert payload["checked_product_count"] == 1


def test_store_view_command_unknown_store():
    result = runner.invoke(app, ["store-view", "404"])
    assert result.exit_code == 1
