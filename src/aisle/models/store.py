"""Store models."""

from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

StoreType = Literal["grocery", "pharmacy", "hardware", "convenience"]
STORE_TYPES: tuple[str, ...] = get_args(StoreType)


def find_duplicate_ids(category_order: list[int]) -> list[int]:
    """Return the category ids appearing more than once, in first-repeat order."""

    seen: set[int] = set()
    duplicates: list[int] = []
    for category_id in category_order:
        if category_id in seen and category_id not in duplicates:
            duplicates.append(category_id)
        seen.add(category_id)
    return duplicates


class StoreLocation(BaseModel):
    """Geographic position of a store."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)

    model_config = ConfigDict(frozen=True)


class Store(BaseModel):
    """A physical store with its own aisle (category) order."""

    id: int
    name: str = Field(min_length=1, max_length=255)
    type: StoreType
    location: StoreLocation
    category_order: list[int] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("category_order")
    @classmethod
    def _reject_duplicates(cls, value: list[int]) -> list[int]:
        duplicates = find_duplicate_ids(value)
        if duplicates:
            raise ValueError(f"category_order contains duplicate ids: {duplicates}")
        return value


__all__ = ["STORE_TYPES", "Store", "StoreLocation", "StoreType", "find_duplicate_ids"]
