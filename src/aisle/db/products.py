"""Product persistence helpers."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from aisle.exceptions import EntityNotFoundError, InvalidEntityError
from aisle.models.product import Product

from .models import CategoryORM, ProductORM, ShoppingListItemORM, ShoppingListORM, utcnow
from .repository import session_scope

logger = logging.getLogger(__name__)

_UNSET = object()


def _to_model(row: ProductORM) -> Product:
    return Product.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "category_id": row.category_id,
            "quantity": {"amount": row.amount, "unit": row.unit},
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidEntityError("Product name cannot be empty")
    return cleaned


def _clean_amount(amount: float) -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError) as exc:
        raise InvalidEntityError(f"Amount must be a number, got {amount!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidEntityError("Amount must be greater than 0")
    return value


def _clean_unit(unit: str) -> str:
    cleaned = (unit or "").strip()
    if not cleaned:
        raise InvalidEntityError("Unit cannot be empty")
    return cleaned


def _check_category(session: Session, category_id: Optional[int]) -> Optional[int]:
    if category_id is not None and session.get(CategoryORM, category_id) is None:
        raise InvalidEntityError(f"Category {category_id} does not exist")
    return category_id


def list_products(
    *,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
) -> List[Product]:
    """Return products sorted by name, optionally filtered by category and name substring."""

    stmt = select(ProductORM).order_by(ProductORM.name, ProductORM.id)
    if category_id is not None:
        stmt = stmt.where(ProductORM.category_id == category_id)

    with session_scope() as session:
        rows = session.execute(stmt).scalars().all()
        products = [_to_model(row) for row in rows]

    query = (search or "").strip().casefold()
    if query:
        products = [product for product in products if query in product.name.casefold()]
    return products


def get_product(product_id: int) -> Optional[Product]:
    with session_scope() as session:
        row = session.get(ProductORM, product_id)
        if row is None:
            return None
        return _to_model(row)


def create_product(
    *,
    name: str,
    amount: float,
    unit: str,
    category_id: Optional[int] = None,
) -> Product:
    with session_scope() as session:
        row = ProductORM(
            name=_clean_name(name),
            amount=_clean_amount(amount),
            unit=_clean_unit(unit),
            category_id=_check_category(session, category_id),
        )
        session.add(row)
        session.flush()
        logger.info(
            "Created product id=%s name=%s category_id=%s",
            row.id,
            row.name,
            row.category_id,
        )
        return _to_model(row)


def update_product(
    product_id: int,
    *,
    name: str | object = _UNSET,
    category_id: int | None | object = _UNSET,
    amount: float | object = _UNSET,
    unit: str | object = _UNSET,
) -> Product:
    with session_scope() as session:
        row = session.get(ProductORM, product_id)
        if row is None:
            raise EntityNotFoundError("Product", product_id)

        if name is not _UNSET:
            row.name = _clean_name(name)  # type: ignore[arg-type]
        if category_id is not _UNSET:
            row.category_id = _check_category(session, category_id)  # type: ignore[arg-type]
        if amount is not _UNSET:
            row.amount = _clean_amount(amount)  # type: ignore[arg-type]
        if unit is not _UNSET:
            row.unit = _clean_unit(unit)  # type: ignore[arg-type]
        row.updated_at = utcnow()

        session.flush()
        return _to_model(row)


def update_product_quantity(product_id: int, *, amount: float, unit: str) -> Product:
    return update_product(product_id, amount=amount, unit=unit)


def delete_product(product_id: int) -> None:
    """Delete a product and remove it from every shopping list."""

    with session_scope() as session:
        row = session.get(ProductORM, product_id)
        if row is None:
            raise EntityNotFoundError("Product", product_id)

        list_ids = (
            session.execute(
                select(ShoppingListItemORM.list_id).where(
                    ShoppingListItemORM.product_id == product_id
                )
            )
            .scalars()
            .all()
        )
        session.execute(
            delete(ShoppingListItemORM).where(ShoppingListItemORM.product_id == product_id)
        )
        if list_ids:
            session.execute(
                update(ShoppingListORM)
                .where(ShoppingListORM.id.in_(list_ids))
                .values(updated_at=utcnow())
            )
        session.delete(row)

    logger.info(
        "Deleted product id=%s (removed from %s list(s))",
        product_id,
        len(list_ids),
        extra={"entity": "product", "entity_id": product_id},
    )


__all__ = [
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "update_product",
    "update_product_quantity",
]
