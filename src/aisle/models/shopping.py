"""Shopping list models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

ListStatus = Literal["active", "completed"]


class ShoppingListItem(BaseModel):
    """Membership of a product in one shopping list, with its per-list checked state."""

    id: int
    list_id: int
    product_id: int
    is_checked: bool = Field(default=False)
    added_at: datetime

    model_config = ConfigDict(frozen=True)


class ShoppingList(BaseModel):
    """Named shopping list owning its items."""

    id: int
    name: str = Field(min_length=1, max_length=255)
    created_at: datetime
    updated_at: datetime
    items: list[ShoppingListItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def item_count(self) -> int:
        return len(self.items)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.is_checked)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_completed(self) -> bool:
        """True when the list has items and every one of them is checked."""

        return bool(self.items) and self.checked_count == len(self.items)

    @property
    def product_ids(self) -> list[int]:
        return [item.product_id for item in self.items]

    @property
    def checked_product_ids(self) -> frozenset[int]:
        return frozenset(item.product_id for item in self.items if item.is_checked)

    def item_for(self, product_id: int) -> Optional[ShoppingListItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def matches_status(self, status: Optional[ListStatus]) -> bool:
        if status is None:
            return True
        if status == "completed":
            return self.is_completed
        return not self.is_completed


__all__ = ["ListStatus", "ShoppingList", "ShoppingListItem"]
