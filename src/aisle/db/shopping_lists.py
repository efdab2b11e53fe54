"""Shopping list persistence helpers.

Products join lists through ``ShoppingListItemORM`` rows; each row carries the checked
flag for that product in that list only. Every item mutation refreshes the owning
list's ``updated_at``.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from aisle.exceptions import EntityNotFoundError, InvalidEntityError
from aisle.models.shopping import ListStatus, ShoppingList, ShoppingListItem

from .models import ProductORM, ShoppingListItemORM, ShoppingListORM, utcnow
from .repository import session_scope

logger = logging.getLogger(__name__)


def _item_to_model(row: ShoppingListItemORM) -> ShoppingListItem:
    return ShoppingListItem.model_validate(
        {
            "id": row.id,
            "list_id": row.list_id,
            "product_id": row.product_id,
            "is_checked": row.is_checked,
            "added_at": row.added_at,
        }
    )


def _to_model(row: ShoppingListORM, items: Iterable[ShoppingListItemORM]) -> ShoppingList:
    return ShoppingList.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
            "items": [_item_to_model(item) for item in items],
        }
    )


def _load_items(session: Session, list_ids: Sequence[int]) -> dict[int, list[ShoppingListItemORM]]:
    grouped: dict[int, list[ShoppingListItemORM]] = defaultdict(list)
    if not list_ids:
        return grouped
    rows = (
        session.execute(
            select(ShoppingListItemORM)
            .where(ShoppingListItemORM.list_id.in_(list_ids))
            .order_by(ShoppingListItemORM.added_at, ShoppingListItemORM.id)
        )
        .scalars()
        .all()
    )
    for row in rows:
        grouped[row.list_id].append(row)
    return grouped


def _snapshot(session: Session, row: ShoppingListORM) -> ShoppingList:
    session.flush()
    return _to_model(row, _load_items(session, [row.id]).get(row.id, []))


def _get_row(session: Session, list_id: int) -> ShoppingListORM:
    row = session.get(ShoppingListORM, list_id)
    if row is None:
        raise EntityNotFoundError("Shopping list", list_id)
    return row


def _get_item(session: Session, list_id: int, product_id: int) -> Optional[ShoppingListItemORM]:
    return session.execute(
        select(ShoppingListItemORM).where(
            ShoppingListItemORM.list_id == list_id,
            ShoppingListItemORM.product_id == product_id,
        )
    ).scalar_one_or_none()


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidEntityError("Shopping list name cannot be empty")
    return cleaned


def _add_item(session: Session, row: ShoppingListORM, product_id: int) -> bool:
    if session.get(ProductORM, product_id) is None:
        raise EntityNotFoundError("Product", product_id)
    if _get_item(session, row.id, product_id) is not None:
        return False
    session.add(ShoppingListItemORM(list_id=row.id, product_id=product_id, is_checked=False))
    row.updated_at = utcnow()
    return True


def list_shopping_lists(
    *,
    search: Optional[str] = None,
    status: Optional[ListStatus] = None,
) -> List[ShoppingList]:
    """Return lists, most recently updated first, filtered by name and completion status."""

    with session_scope() as session:
        rows = (
            session.execute(
                select(ShoppingListORM).order_by(
                    ShoppingListORM.updated_at.desc(), ShoppingListORM.id.desc()
                )
            )
            .scalars()
            .all()
        )
        items = _load_items(session, [row.id for row in rows])
        lists = [_to_model(row, items.get(row.id, [])) for row in rows]

    query = (search or "").strip().casefold()
    if query:
        lists = [item for item in lists if query in item.name.casefold()]
    return [item for item in lists if item.matches_status(status)]


def get_shopping_list(list_id: int) -> Optional[ShoppingList]:
    with session_scope() as session:
        row = session.get(ShoppingListORM, list_id)
        if row is None:
            return None
        return _snapshot(session, row)


def create_shopping_list(*, name: str, product_ids: Iterable[int] = ()) -> ShoppingList:
    with session_scope() as session:
        row = ShoppingListORM(name=_clean_name(name))
        session.add(row)
        session.flush()
        for product_id in product_ids:
            if _add_item(session, row, product_id):
                session.flush()
        logger.info("Created shopping list id=%s name=%s", row.id, row.name)
        return _snapshot(session, row)


def rename_shopping_list(list_id: int, *, name: str) -> ShoppingList:
    with session_scope() as session:
        row = _get_row(session, list_id)
        row.name = _clean_name(name)
        row.updated_at = utcnow()
        return _snapshot(session, row)


def delete_shopping_list(list_id: int) -> None:
    """Delete a list and its items; the products themselves are kept."""

    with session_scope() as session:
        row = _get_row(session, list_id)
        session.execute(delete(ShoppingListItemORM).where(ShoppingListItemORM.list_id == list_id))
        session.delete(row)
    logger.info(
        "Deleted shopping list id=%s",
        list_id,
        extra={"entity": "shopping_list", "entity_id": list_id},
    )


def add_product_to_list(list_id: int, product_id: int) -> ShoppingList:
    """Add a product to a list. Adding a product that is already there changes nothing."""

    with session_scope() as session:
        row = _get_row(session, list_id)
        if not _add_item(session, row, product_id):
            logger.debug("Product %s already on list %s", product_id, list_id)
        return _snapshot(session, row)


def remove_product_from_list(list_id: int, product_id: int) -> ShoppingList:
    with session_scope() as session:
        row = _get_row(session, list_id)
        item = _get_item(session, list_id, product_id)
        if item is None:
            raise EntityNotFoundError("Shopping list item", f"{list_id}/{product_id}")
        session.delete(item)
        row.updated_at = utcnow()
        return _snapshot(session, row)


def set_product_checked(list_id: int, product_id: int, checked: bool) -> ShoppingList:
    with session_scope() as session:
        row = _get_row(session, list_id)
        item = _get_item(session, list_id, product_id)
        if item is None:
            raise EntityNotFoundError("Shopping list item", f"{list_id}/{product_id}")
        item.is_checked = bool(checked)
        row.updated_at = utcnow()
        return _snapshot(session, row)


def toggle_product_checked(list_id: int, product_id: int) -> ShoppingList:
    """Flip the checked flag of ``product_id`` in this list only."""

    with session_scope() as session:
        row = _get_row(session, list_id)
        item = _get_item(session, list_id, product_id)
        if item is None:
            raise EntityNotFoundError("Shopping list item", f"{list_id}/{product_id}")
        item.is_checked = not item.is_checked
        row.updated_at = utcnow()
        return _snapshot(session, row)


def clear_checked_items(list_id: int) -> ShoppingList:
    """Uncheck every item of the list, keeping the items."""

    with session_scope() as session:
        row = _get_row(session, list_id)
        session.execute(
            update(ShoppingListItemORM)
            .where(ShoppingListItemORM.list_id == list_id, ShoppingListItemORM.is_checked.is_(True))
            .values(is_checked=False)
        )
        row.updated_at = utcnow()
        return _snapshot(session, row)


__all__ = [
    "add_product_to_list",
    "clear_checked_items",
    "create_shopping_list",
    "delete_shopping_list",
    "get_shopping_list",
    "list_shopping_lists",
    "remove_product_from_list",
    "rename_shopping_list",
    "set_product_checked",
    "toggle_product_checked",
]
