"""Read-only projections built from stores, products and categories."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from aisle.models.product import Product


class CategoryProductGroup(BaseModel):
    """Products of one category, in the position the store gives that category."""

    category_id: int
    category_name: str
    products: list[Product] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class StoreProductView(BaseModel):
    """Products relevant to one store, grouped by the store's category order."""

    store_id: int
    store_name: str
    groups: list[CategoryProductGroup] = Field(default_factory=list)
    checked_product_ids: frozenset[int] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_product_count(self) -> int:
        return sum(len(group.products) for group in self.groups)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def checked_product_count(self) -> int:
        return sum(
            1
            for group in self.groups
            for product in group.products
            if product.id in self.checked_product_ids
        )


class ListStoreSection(BaseModel):
    """One shopping list's products available at a store."""

    list_id: int
    list_name: str
    view: StoreProductView

    model_config = ConfigDict(frozen=True)


class StoreShoppingView(BaseModel):
    """Every shopping list's products at one store, with overall progress."""

    store_id: int
    store_name: str
    sections: list[ListStoreSection] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_items(self) -> int:
        return sum(section.view.total_product_count for section in self.sections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def completed_items(self) -> int:
        return sum(section.view.checked_product_count for section in self.sections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        if not self.total_items:
            return 0.0
        return self.completed_items / self.total_items


__all__ = [
    "CategoryProductGroup",
    "ListStoreSection",
    "StoreProductView",
    "StoreShoppingView",
]
