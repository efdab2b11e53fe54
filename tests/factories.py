"""Builders for in-memory domain objects used by unit tests."""

from __future__ import annotations

from datetime import datetime

from aisle.models import Category, Product, ShoppingList, Store

STAMP = datetime(2024, 1, 1, 12, 0, 0)


def make_category(category_id: int, name: str, keywords=(), default_unit=None) -> Category:
    return Category(id=category_id, name=name, keywords=list(keywords), default_unit=default_unit)


def make_product(product_id: int, name: str, category_id=None, amount=1.0, unit="pcs") -> Product:
    return Product(
        id=product_id,
        name=name,
        category_id=category_id,
        quantity={"amount": amount, "unit": unit},
        created_at=STAMP,
        updated_at=STAMP,
    )


def make_store(store_id: int, category_order, name="Corner Store", store_type="grocery") -> Store:
    return Store(
        id=store_id,
        name=name,
        type=store_type,
        location={"latitude": 44.43, "longitude": 26.10},
        category_order=list(category_order),
    )


def make_list(list_id: int, name: str, product_ids=(), checked=()) -> ShoppingList:
    checked_ids = set(checked)
    return ShoppingList(
        id=list_id,
        name=name,
        created_at=STAMP,
        updated_at=STAMP,
        items=[
            {
                "id": list_id * 100 + index,
                "list_id": list_id,
                "product_id": product_id,
                "is_checked": product_id in checked_ids,
                "added_at": STAMP,
            }
            for index, product_id in enumerate(product_ids, start=1)
        ],
    )
