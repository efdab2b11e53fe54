"""Product models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductQuantity(BaseModel):
    """Amount and unit of a product to buy."""

    amount: float = Field(gt=0, allow_inf_nan=False)
    unit: str = Field(min_length=1, max_length=64)

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """A product that can be added to any number of shopping lists."""

    id: int
    name: str = Field(min_length=1, max_length=255)
    category_id: Optional[int] = Field(default=None)
    quantity: ProductQuantity
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


__all__ = ["Product", "ProductQuantity"]
