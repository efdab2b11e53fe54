"""Category models."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_keywords(keywords: Iterable[str]) -> list[str]:
    """Lowercase and strip keywords, dropping blanks and repeats (first occurrence wins)."""

    normalized: dict[str, None] = {}
    for keyword in keywords:
        cleaned = str(keyword).strip().lower()
        if cleaned:
            normalized.setdefault(cleaned, None)
    return list(normalized)


class Category(BaseModel):
    """Grouping label for products, carrying keyword hints and a default unit."""

    id: int
    name: str = Field(min_length=1, max_length=255)
    keywords: list[str] = Field(default_factory=list)
    default_unit: Optional[str] = Field(default=None, max_length=64)

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("keywords", mode="before")
    @classmethod
    def _lowercase_keywords(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple, set, frozenset)):
            return normalize_keywords(value)
        return value


class CategorySuggestion(BaseModel):
    """Result of auto-categorizing a product name."""

    category: Category
    matched_keyword: str
    unit: Optional[str] = Field(
        default=None,
        description="Unit to pre-fill from the category's default unit, when it has one.",
    )

    model_config = ConfigDict(frozen=True)


__all__ = ["Category", "CategorySuggestion", "normalize_keywords"]
