"""Keyword-based product categorization.

A product name is matched against every category's keyword list by substring
containment. The category owning the longest matching keyword wins, so "hammer"
lands in Tools even though Meat's "ham" is also a substring of it. Ties keep the
category that comes first in the input sequence.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from aisle import metrics
from aisle.models.category import Category, CategorySuggestion

logger = logging.getLogger(__name__)


def _normalize_name(product_name: str) -> str:
    return (product_name or "").strip().lower()


def _longest_keyword(name: str, category: Category) -> Optional[str]:
    best: Optional[str] = None
    for keyword in category.keywords:
        if keyword and keyword in name and (best is None or len(keyword) > len(best)):
            best = keyword
    return best


def _best_match(
    product_name: str, categories: Iterable[Category]
) -> Optional[tuple[Category, str]]:
    name = _normalize_name(product_name)
    if not name:
        return None

    winner: Optional[tuple[Category, str]] = None
    for category in categories:
        keyword = _longest_keyword(name, category)
        if keyword is None:
            continue
        if winner is None or len(keyword) > len(winner[1]):
            winner = (category, keyword)
    return winner


def suggest_category(product_name: str, categories: Iterable[Category]) -> Optional[Category]:
    """Return the category whose keyword best matches ``product_name``, or ``None``."""

    match = _best_match(product_name, categories)
    return match[0] if match else None


def suggest_for_product(
    product_name: str, categories: Iterable[Category]
) -> Optional[CategorySuggestion]:
    """Suggest a category plus the unit a product form should pre-fill.

    Returns ``None`` when the name is blank or nothing matches.
    """

    match = _best_match(product_name, categories)
    if match is None:
        metrics.CATEGORY_SUGGESTIONS.labels(result="unmatched").inc()
        logger.debug("No category suggestion for name=%r", product_name)
        return None

    category, keyword = match
    metrics.CATEGORY_SUGGESTIONS.labels(result="matched").inc()
    logger.debug(
        "Suggested category=%s for name=%r via keyword=%r",
        category.name,
        product_name,
        keyword,
    )
    return CategorySuggestion(category=category, matched_keyword=keyword, unit=category.default_unit)


__all__ = ["suggest_category", "suggest_for_product"]
