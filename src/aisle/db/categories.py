"""Category persistence helpers, including first-run seeding."""

from __future__ import annotations

import logging
from typing import Iterable, List, Literal, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from aisle import metrics
from aisle.catalog import DEFAULT_CATEGORIES, CategorySeed
from aisle.exceptions import EntityNotFoundError, InvalidEntityError
from aisle.models.category import Category, normalize_keywords

from .models import CategoryORM, ProductORM, utcnow
from .repository import session_scope

logger = logging.getLogger(__name__)

_UNSET = object()

CategorySort = Literal["name", "id"]


def _to_model(row: CategoryORM) -> Category:
    return Category.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "keywords": list(row.keywords or []),
            "default_unit": row.default_unit,
        }
    )


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidEntityError("Category name cannot be empty")
    return cleaned


def _clean_unit(unit: Optional[str]) -> Optional[str]:
    if unit is None:
        return None
    return unit.strip() or None


def list_categories(sort: CategorySort = "name") -> List[Category]:
    """Return all categories.

    ``sort="id"`` yields creation order, which is the catalog order for seeded
    categories and the order used to break suggestion ties.
    """

    order = (CategoryORM.id,) if sort == "id" else (CategoryORM.name, CategoryORM.id)
    with session_scope() as session:
        rows = session.execute(select(CategoryORM).order_by(*order)).scalars().all()
        return [_to_model(row) for row in rows]


def get_category(category_id: int) -> Optional[Category]:
    with session_scope() as session:
        row = session.get(CategoryORM, category_id)
        if row is None:
            return None
        return _to_model(row)


def count_categories() -> int:
    with session_scope() as session:
        return int(session.execute(select(func.count(CategoryORM.id))).scalar_one())


def create_category(
    *,
    name: str,
    keywords: Iterable[str] = (),
    default_unit: Optional[str] = None,
) -> Category:
    with session_scope() as session:
        row = CategoryORM(
            name=_clean_name(name),
            keywords=normalize_keywords(keywords),
            default_unit=_clean_unit(default_unit),
        )
        session.add(row)
        session.flush()
        logger.info("Created category id=%s name=%s", row.id, row.name)
        return _to_model(row)


def update_category(
    category_id: int,
    *,
    name: str | object = _UNSET,
    keywords: Iterable[str] | object = _UNSET,
    default_unit: str | None | object = _UNSET,
) -> Category:
    with session_scope() as session:
        row = session.get(CategoryORM, category_id)
        if row is None:
            raise EntityNotFoundError("Category", category_id)

        if name is not _UNSET:
            row.name = _clean_name(name)  # type: ignore[arg-type]
        if keywords is not _UNSET:
            row.keywords = normalize_keywords(keywords or ())  # type: ignore[arg-type]
        if default_unit is not _UNSET:
            row.default_unit = _clean_unit(default_unit)  # type: ignore[arg-type]

        session.flush()
        return _to_model(row)


def delete_category(category_id: int) -> int:
    """Delete a category and uncategorize its products.

    Store category orders keep the id; views skip ids that no longer resolve.
    Returns the number of products that lost their category.
    """

    with session_scope() as session:
        row = session.get(CategoryORM, category_id)
        if row is None:
            raise EntityNotFoundError("Category", category_id)

        result = session.execute(
            update(ProductORM)
            .where(ProductORM.category_id == category_id)
            .values(category_id=None, updated_at=utcnow())
        )
        session.delete(row)
        uncategorized = result.rowcount or 0

    logger.info(
        "Deleted category id=%s; %s product(s) now uncategorized",
        category_id,
        uncategorized,
        extra={"entity": "category", "entity_id": category_id},
    )
    return uncategorized


def category_ids_by_name(session: Session, names: Sequence[str]) -> list[int]:
    """Resolve category names to ids in the given order, skipping unknown names."""

    rows = session.execute(select(CategoryORM.id, CategoryORM.name).order_by(CategoryORM.id)).all()
    by_name: dict[str, int] = {}
    for category_id, name in rows:
        by_name.setdefault(name, category_id)

    resolved: list[int] = []
    for name in names:
        category_id = by_name.get(name)
        if category_id is not None and category_id not in resolved:
            resolved.append(category_id)
    return resolved


def seed_default_categories(catalog: Sequence[CategorySeed] = DEFAULT_CATEGORIES) -> int:
    """Insert ``catalog`` when no category exists yet; return how many were inserted."""

    with session_scope() as session:
        exists = session.execute(select(CategoryORM.id).limit(1)).first()
        if exists:
            logger.debug("Categories already present; skipping seed")
            return 0

        for seed in catalog:
            session.add(
                CategoryORM(
                    name=seed.name,
                    keywords=list(seed.keywords),
                    default_unit=seed.default_unit,
                )
            )
        session.flush()

    metrics.CATEGORIES_SEEDED.inc(len(catalog))
    logger.info("Seeded %s default categories", len(catalog))
    return len(catalog)


__all__ = [
    "category_ids_by_name",
    "count_categories",
    "create_category",
    "delete_category",
    "get_category",
    "list_categories",
    "seed_default_categories",
    "update_category",
]
