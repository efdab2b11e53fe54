"""Store-ordered product views.

``build_store_view`` projects a pool of products onto one store: only products whose
category is part of the store's category order are kept, grouped in that order, and
sorted by name inside each group. Unresolved category ids and uncategorized products
are skipped rather than reported.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from aisle.models.category import Category
from aisle.models.product import Product
from aisle.models.shopping import ShoppingList
from aisle.models.store import Store
from aisle.models.views import (
    CategoryProductGroup,
    ListStoreSection,
    StoreProductView,
    StoreShoppingView,
)


def _name_key(product: Product) -> tuple[str, str]:
    return (product.name.casefold(), product.name)


def build_store_view(
    store: Store,
    products: Iterable[Product],
    categories: Iterable[Category],
    checked_product_ids: Optional[Iterable[int]] = None,
) -> StoreProductView:
    """Group ``products`` by ``store.category_order``, omitting empty groups."""

    category_map = {category.id: category for category in categories}
    member_ids = set(store.category_order)
    in_store = [
        product
        for product in products
        if product.category_id is not None and product.category_id in member_ids
    ]

    groups: list[CategoryProductGroup] = []
    for category_id in store.category_order:
        selection = [product for product in in_store if product.category_id == category_id]
        category = category_map.get(category_id)
        if not selection or category is None:
            continue
        groups.append(
            CategoryProductGroup(
                category_id=category_id,
                category_name=category.name,
                products=sorted(selection, key=_name_key),
            )
        )

    return StoreProductView(
        store_id=store.id,
        store_name=store.name,
        groups=groups,
        checked_product_ids=frozenset(checked_product_ids or ()),
    )


def build_store_shopping_view(
    store: Store,
    shopping_lists: Sequence[ShoppingList],
    products: Iterable[Product],
    categories: Iterable[Category],
) -> StoreShoppingView:
    """Build one store view per shopping list, skipping lists with nothing to buy here."""

    product_map = {product.id: product for product in products}
    category_list = list(categories)

    sections: list[ListStoreSection] = []
    for shopping_list in shopping_lists:
        # Items whose product has been deleted simply do not resolve.
        list_products = [
            product_map[product_id]
            for product_id in shopping_list.product_ids
            if product_id in product_map
        ]
        view = build_store_view(
            store,
            list_products,
            category_list,
            checked_product_ids=shopping_list.checked_product_ids,
        )
        if view.groups:
            sections.append(
                ListStoreSection(
                    list_id=shopping_list.id,
                    list_name=shopping_list.name,
                    view=view,
                )
            )

    return StoreShoppingView(store_id=store.id, store_name=store.name, sections=sections)


__all__ = ["build_store_view", "build_store_shopping_view"]
