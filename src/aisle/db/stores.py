"""Store persistence helpers and category-order mutations."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import select

from aisle.catalog import default_category_names
from aisle.exceptions import EntityNotFoundError, InvalidEntityError
from aisle.models.category import Category
from aisle.models.store import STORE_TYPES, Store, StoreLocation, StoreType, find_duplicate_ids

from .categories import _to_model as _category_to_model
from .categories import category_ids_by_name
from .models import CategoryORM, StoreORM
from .repository import session_scope

logger = logging.getLogger(__name__)

_UNSET = object()


def _to_model(row: StoreORM) -> Store:
    return Store.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "type": row.store_type,
            "location": {
                "latitude": row.latitude,
                "longitude": row.longitude,
                "address": row.address,
            },
            "category_order": list(row.category_order or []),
        }
    )


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidEntityError("Store name cannot be empty")
    return cleaned


def _clean_type(store_type: str) -> StoreType:
    if store_type not in STORE_TYPES:
        raise InvalidEntityError(
            f"Unknown store type {store_type!r}; expected one of {', '.join(STORE_TYPES)}"
        )
    return store_type  # type: ignore[return-value]


def _clean_location(latitude: float, longitude: float, address: Optional[str]) -> StoreLocation:
    try:
        return StoreLocation(latitude=latitude, longitude=longitude, address=address or None)
    except ValidationError as exc:
        raise InvalidEntityError(f"Invalid store location: {exc.errors()}") from exc


def _clean_order(category_order: Sequence[int]) -> list[int]:
    order = [int(category_id) for category_id in category_order]
    duplicates = find_duplicate_ids(order)
    if duplicates:
        raise InvalidEntityError(f"Category order contains duplicate ids: {duplicates}")
    return order


def _get_row(session, store_id: int) -> StoreORM:
    row = session.get(StoreORM, store_id)
    if row is None:
        raise EntityNotFoundError("Store", store_id)
    return row


def list_stores(store_type: Optional[StoreType] = None) -> List[Store]:
    """Return stores sorted by name, optionally restricted to one store type."""

    stmt = select(StoreORM).order_by(StoreORM.name, StoreORM.id)
    if store_type is not None:
        stmt = stmt.where(StoreORM.store_type == store_type)
    with session_scope() as session:
        rows = session.execute(stmt).scalars().all()
        return [_to_model(row) for row in rows]


def get_store(store_id: int) -> Optional[Store]:
    with session_scope() as session:
        row = session.get(StoreORM, store_id)
        if row is None:
            return None
        return _to_model(row)


def create_store(
    *,
    name: str,
    store_type: StoreType,
    latitude: float,
    longitude: float,
    address: Optional[str] = None,
    category_order: Optional[Sequence[int]] = None,
) -> Store:
    """Create a store.

    Without an explicit ``category_order`` the store starts with its type's default
    categories, resolved by name against the existing categories.
    """

    cleaned_type = _clean_type(store_type)
    location = _clean_location(latitude, longitude, address)

    with session_scope() as session:
        if category_order is None:
            order = category_ids_by_name(session, default_category_names(cleaned_type))
        else:
            order = _clean_order(category_order)

        row = StoreORM(
            name=_clean_name(name),
            store_type=cleaned_type,
            latitude=location.latitude,
            longitude=location.longitude,
            address=location.address,
            category_order=order,
        )
        session.add(row)
        session.flush()
        logger.info(
            "Created store id=%s name=%s type=%s with %s categories",
            row.id,
            row.name,
            row.store_type,
            len(order),
        )
        return _to_model(row)


def update_store(
    store_id: int,
    *,
    name: str | object = _UNSET,
    store_type: StoreType | object = _UNSET,
    latitude: float | object = _UNSET,
    longitude: float | object = _UNSET,
    address: str | None | object = _UNSET,
) -> Store:
    with session_scope() as session:
        row = _get_row(session, store_id)

        if name is not _UNSET:
            row.name = _clean_name(name)  # type: ignore[arg-type]
        if store_type is not _UNSET:
            row.store_type = _clean_type(str(store_type))
        if latitude is not _UNSET or longitude is not _UNSET or address is not _UNSET:
            location = _clean_location(
                row.latitude if latitude is _UNSET else latitude,  # type: ignore[arg-type]
                row.longitude if longitude is _UNSET else longitude,  # type: ignore[arg-type]
                row.address if address is _UNSET else address,  # type: ignore[arg-type]
            )
            row.latitude = location.latitude
            row.longitude = location.longitude
            row.address = location.address

        session.flush()
        return _to_model(row)


def delete_store(store_id: int) -> None:
    with session_scope() as session:
        row = _get_row(session, store_id)
        session.delete(row)
    logger.info("Deleted store id=%s", store_id, extra={"entity": "store", "entity_id": store_id})


def add_store_category(store_id: int, category_id: int) -> Store:
    """Append a category to the store's order; no-op when it is already there."""

    with session_scope() as session:
        row = _get_row(session, store_id)
        if session.get(CategoryORM, category_id) is None:
            raise EntityNotFoundError("Category", category_id)

        order = list(row.category_order or [])
        if category_id not in order:
            # JSON columns only detect reassignment, not in-place mutation.
            row.category_order = order + [category_id]
            session.flush()
        return _to_model(row)


def remove_store_category(store_id: int, category_id: int) -> Store:
    with session_scope() as session:
        row = _get_row(session, store_id)
        row.category_order = [cid for cid in (row.category_order or []) if cid != category_id]
        session.flush()
        return _to_model(row)


def reorder_store_categories(store_id: int, new_order: Sequence[int]) -> Store:
    """Replace the store's category order; duplicates are rejected."""

    order = _clean_order(new_order)
    with session_scope() as session:
        row = _get_row(session, store_id)
        row.category_order = order
        session.flush()
        logger.debug("Reordered store id=%s categories=%s", store_id, order)
        return _to_model(row)


def list_store_categories(store_id: int) -> List[Category]:
    """Return the store's categories in aisle order, skipping ids that no longer resolve."""

    with session_scope() as session:
        row = _get_row(session, store_id)
        order = list(row.category_order or [])
        if not order:
            return []
        categories = (
            session.execute(select(CategoryORM).where(CategoryORM.id.in_(order))).scalars().all()
        )
        by_id = {category.id: _category_to_model(category) for category in categories}
        return [by_id[category_id] for category_id in order if category_id in by_id]


__all__ = [
    "add_store_category",
    "create_store",
    "delete_store",
    "get_store",
    "list_store_categories",
    "list_stores",
    "remove_store_category",
    "reorder_store_categories",
    "update_store",
]
