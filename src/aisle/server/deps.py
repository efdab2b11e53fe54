"""Dependency definitions for the Aisle API server."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, Request, status

from aisle.config import get_settings
from aisle.db.categories import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)
from aisle.db.products import create_product, delete_product, get_product, list_products, update_product
from aisle.db.shopping_lists import (
    add_product_to_list,
    clear_checked_items,
    create_shopping_list,
    delete_shopping_list,
    get_shopping_list,
    list_shopping_lists,
    remove_product_from_list,
    rename_shopping_list,
    toggle_product_checked,
)
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
from aisle.models.category import Category
from aisle.models.product import Product
from aisle.models.shopping import ListStatus, ShoppingList
from aisle.models.store import Store, StoreType

CategoryProvider = Callable[[], List[Category]]
CategoryFetcher = Callable[[int], Optional[Category]]
CategoryCreator = Callable[[dict], Category]
CategoryUpdater = Callable[[int, dict], Category]
CategoryDeleter = Callable[[int], int]
ProductProvider = Callable[[Optional[int], Optional[str]], List[Product]]
ProductFetcher = Callable[[int], Optional[Product]]
ProductCreator = Callable[[dict], Product]
ProductUpdater = Callable[[int, dict], Product]
ProductDeleter = Callable[[int], None]
StoreProvider = Callable[[Optional[StoreType]], List[Store]]
StoreFetcher = Callable[[int], Optional[Store]]
StoreCreator = Callable[[dict], Store]
StoreUpdater = Callable[[int, dict], Store]
StoreDeleter = Callable[[int], None]
StoreCategoryProvider = Callable[[int], List[Category]]
StoreCategoryAdder = Callable[[int, int], Store]
StoreCategoryRemover = Callable[[int, int], Store]
StoreCategoryReorderer = Callable[[int, List[int]], Store]
ShoppingListProvider = Callable[[Optional[str], Optional[ListStatus]], List[ShoppingList]]
ShoppingListFetcher = Callable[[int], Optional[ShoppingList]]
ShoppingListCreator = Callable[[dict], ShoppingList]
ShoppingListRenamer = Callable[[int, str], ShoppingList]
ShoppingListDeleter = Callable[[int], None]
ShoppingListItemAdder = Callable[[int, int], ShoppingList]
ShoppingListItemRemover = Callable[[int, int], ShoppingList]
ShoppingListItemToggler = Callable[[int, int], ShoppingList]
ShoppingListCheckedClearer = Callable[[int], ShoppingList]


def get_category_provider() -> CategoryProvider:
    return list_categories


def get_suggestion_categories() -> CategoryProvider:
    """Categories in creation order, which decides suggestion ties."""

    return lambda: list_categories(sort="id")


def get_category_fetcher() -> CategoryFetcher:
    return get_category


def get_category_creator() -> CategoryCreator:
    return lambda payload: create_category(**payload)


def get_category_updater() -> CategoryUpdater:
    return lambda category_id, payload: update_category(category_id, **payload)


def get_category_deleter() -> CategoryDeleter:
    return delete_category


def get_product_provider() -> ProductProvider:
    return lambda category_id=None, search=None: list_products(
        category_id=category_id,
        search=search,
    )


def get_product_fetcher() -> ProductFetcher:
    return get_product


def get_product_creator() -> ProductCreator:
    return lambda payload: create_product(**payload)


def get_product_updater() -> ProductUpdater:
    return lambda product_id, payload: update_product(product_id, **payload)


def get_product_deleter() -> ProductDeleter:
    return delete_product


def get_store_provider() -> StoreProvider:
    return lambda store_type=None: list_stores(store_type)


def get_store_fetcher() -> StoreFetcher:
    return get_store


def get_store_creator() -> StoreCreator:
    return lambda payload: create_store(**payload)


def get_store_updater() -> StoreUpdater:
    return lambda store_id, payload: update_store(store_id, **payload)


def get_store_deleter() -> StoreDeleter:
    return delete_store


def get_store_category_provider() -> StoreCategoryProvider:
    return list_store_categories


def get_store_category_adder() -> StoreCategoryAdder:
    return add_store_category


def get_store_category_remover() -> StoreCategoryRemover:
    return remove_store_category


def get_store_category_reorderer() -> StoreCategoryReorderer:
    return reorder_store_categories


def get_shopping_list_provider() -> ShoppingListProvider:
    return lambda search=None, status=None: list_shopping_lists(search=search, status=status)


def get_shopping_list_fetcher() -> ShoppingListFetcher:
    return get_shopping_list


def get_shopping_list_creator() -> ShoppingListCreator:
    return lambda payload: create_shopping_list(**payload)


def get_shopping_list_renamer() -> ShoppingListRenamer:
    return lambda list_id, name: rename_shopping_list(list_id, name=name)


def get_shopping_list_deleter() -> ShoppingListDeleter:
    return delete_shopping_list


def get_shopping_list_item_adder() -> ShoppingListItemAdder:
    return add_product_to_list


def get_shopping_list_item_remover() -> ShoppingListItemRemover:
    return remove_product_from_list


def get_shopping_list_item_toggler() -> ShoppingListItemToggler:
    return toggle_product_checked


def get_shopping_list_checked_clearer() -> ShoppingListCheckedClearer:
    return clear_checked_items


def require_api_token(
    request: Request,
    settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
