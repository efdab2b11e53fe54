"""Pydantic models defining shared data contracts."""

from aisle.models.category import Category, CategorySuggestion, normalize_keywords
from aisle.models.product import Product, ProductQuantity
from aisle.models.shopping import ListStatus, ShoppingList, ShoppingListItem
from aisle.models.store import STORE_TYPES, Store, StoreLocation, StoreType
from aisle.models.views import (
    CategoryProductGroup,
    ListStoreSection,
    StoreProductView,
    StoreShoppingView,
)

__all__ = [
    "Category",
    "CategorySuggestion",
    "normalize_keywords",
    "Product",
    "ProductQuantity",
    "ListStatus",
    "ShoppingList",
    "ShoppingListItem",
    "STORE_TYPES",
    "Store",
    "StoreLocation",
    "StoreType",
    "CategoryProductGroup",
    "ListStoreSection",
    "StoreProductView",
    "StoreShoppingView",
]
