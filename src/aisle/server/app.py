"""ASGI application for Aisle."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from starlette.routing import Match

from aisle import __version__, metrics
from aisle.categorize import suggest_for_product
from aisle.config import Settings, get_settings
from aisle.db.categories import seed_default_categories
from aisle.exceptions import EntityNotFoundError, InvalidEntityError
from aisle.logging_utils import configure_logging as configure_app_logging
from aisle.models.category import Category, CategorySuggestion
from aisle.models.product import Product
from aisle.models.shopping import ListStatus, ShoppingList
from aisle.models.store import Store, StoreType, find_duplicate_ids
from aisle.models.views import StoreProductView, StoreShoppingView
from aisle.server import deps
from aisle.store_view import build_store_shopping_view, build_store_view

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


UNMATCHED_ROUTE = "<unmatched>"


def _route_path(request: Request) -> str:
    """Route template for metric labels, so ids and unknown URLs share one series each."""

    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_ROUTE)
    return UNMATCHED_ROUTE


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Aisle Shopping Lists", version=__version__)

    if settings.seed_on_startup:

        @application.on_event("startup")
        def seed_categories() -> None:
            inserted = seed_default_categories()
            if inserted:
                logger.info("Startup seeding inserted %s categories", inserted)

    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("aisle.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    request.url.path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                path = _route_path(request)
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
                raise

            duration_ms = (perf_counter() - start) * 1000
            path = _route_path(request)
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
            extra={"request_id": getattr(request.state, "request_id", None)},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @application.exception_handler(InvalidEntityError)
    async def invalid_entity_handler(request: Request, exc: InvalidEntityError):
        logger.info("Rejected mutation on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @application.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "Persistence failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            extra={"request_id": getattr(request.state, "request_id", None)},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage unavailable"},
        )

    # Categories -------------------------------------------------------------

    @application.get("/categories", response_model=list[Category], summary="List categories")
    def categories_list(
        provider: deps.CategoryProvider = Depends(deps.get_category_provider),
    ) -> list[Category]:
        return provider()

    @application.get(
        "/categories/suggest",
        response_model=Optional[CategorySuggestion],
        summary="Suggest a category for a product name",
    )
    def categories_suggest(
        name: str = Query(default="", max_length=255),
        provider: deps.CategoryProvider = Depends(deps.get_suggestion_categories),
    ) -> Optional[CategorySuggestion]:
        return suggest_for_product(name, provider())

    @application.post(
        "/categories",
        response_model=Category,
        status_code=status.HTTP_201_CREATED,
        summary="Create category",
    )
    def categories_create(
        payload: CategoryCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        creator: deps.CategoryCreator = Depends(deps.get_category_creator),
    ) -> Category:
        return creator(payload.model_dump())

    @application.get("/categories/{category_id}", response_model=Category, summary="Get category")
    def categories_get(
        category_id: int,
        fetcher: deps.CategoryFetcher = Depends(deps.get_category_fetcher),
    ) -> Category:
        category = fetcher(category_id)
        if category is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        return category

    @application.put(
        "/categories/{category_id}", response_model=Category, summary="Update category"
    )
    def categories_update(
        category_id: int,
        payload: CategoryUpdateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        updater: deps.CategoryUpdater = Depends(deps.get_category_updater),
    ) -> Category:
        return updater(category_id, _require_fields(payload))

    @application.delete(
        "/categories/{category_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete category (its products become uncategorized)",
    )
    def categories_delete(
        category_id: int,
        auth: None = Depends(deps.require_api_token),
        deleter: deps.CategoryDeleter = Depends(deps.get_category_deleter),
    ) -> None:
        deleter(category_id)

    # Products ---------------------------------------------------------------

    @application.get("/products", response_model=list[Product], summary="List products")
    def products_list(
        category_id: Optional[int] = Query(default=None, ge=1),
        search: Optional[str] = Query(default=None, max_length=255),
        provider: deps.ProductProvider = Depends(deps.get_product_provider),
    ) -> list[Product]:
        return provider(category_id, search)

    @application.post(
        "/products",
        response_model=Product,
        status_code=status.HTTP_201_CREATED,
        summary="Create product (auto-categorized when no category is given)",
    )
    def products_create(
        payload: ProductCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        settings: Settings = Depends(get_settings),
        categories: deps.CategoryProvider = Depends(deps.get_suggestion_categories),
        creator: deps.ProductCreator = Depends(deps.get_product_creator),
    ) -> Product:
        category_id = payload.category_id
        unit = payload.unit
        if category_id is None and payload.auto_categorize:
            suggestion = suggest_for_product(payload.name, categories())
            if suggestion is not None:
                category_id = suggestion.category.id
                unit = unit or suggestion.unit

        create_payload: dict[str, Any] = {
            "name": payload.name,
            "amount": payload.amount,
            "unit": unit or settings.default_unit,
            "category_id": category_id,
        }
        logger.debug("Creating product payload=%s", create_payload)
        return creator(create_payload)

    @application.get("/products/{product_id}", response_model=Product, summary="Get product")
    def products_get(
        product_id: int,
        fetcher: deps.ProductFetcher = Depends(deps.get_product_fetcher),
    ) -> Product:
        product = fetcher(product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        return product

    @application.put("/products/{product_id}", response_model=Product, summary="Update product")
    def products_update(
        product_id: int,
        payload: ProductUpdateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        updater: deps.ProductUpdater = Depends(deps.get_product_updater),
    ) -> Product:
        return updater(product_id, _require_fields(payload))

    @application.delete(
        "/products/{product_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete product and remove it from every list",
    )
    def products_delete(
        product_id: int,
        auth: None = Depends(deps.require_api_token),
        deleter: deps.ProductDeleter = Depends(deps.get_product_deleter),
    ) -> None:
        deleter(product_id)

    # Stores -----------------------------------------------------------------

    @application.get("/stores", response_model=list[Store], summary="List stores")
    def stores_list(
        store_type: Optional[StoreType] = Query(default=None, alias="type"),
        provider: deps.StoreProvider = Depends(deps.get_store_provider),
    ) -> list[Store]:
        return provider(store_type)

    @application.post(
        "/stores",
        response_model=Store,
        status_code=status.HTTP_201_CREATED,
        summary="Create store (default category order derived from its type)",
    )
    def stores_create(
        payload: StoreCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        creator: deps.StoreCreator = Depends(deps.get_store_creator),
    ) -> Store:
        return creator(
            {
                "name": payload.name,
                "store_type": payload.type,
                "latitude": payload.latitude,
                "longitude": payload.longitude,
                "address": payload.address,
                "category_order": payload.category_order,
            }
        )

    @application.get("/stores/{store_id}", response_model=Store, summary="Get store")
    def stores_get(
        store_id: int,
        fetcher: deps.StoreFetcher = Depends(deps.get_store_fetcher),
    ) -> Store:
        return _fetch_store(fetcher, store_id)

    @application.put("/stores/{store_id}", response_model=Store, summary="Update store")
    def stores_update(
        store_id: int,
        payload: StoreUpdateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        updater: deps.StoreUpdater = Depends(deps.get_store_updater),
    ) -> Store:
        update_payload = _require_fields(payload)
        if "type" in update_payload:
            update_payload["store_type"] = update_payload.pop("type")
        return updater(store_id, update_payload)

    @application.delete(
        "/stores/{store_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete store"
    )
    def stores_delete(
        store_id: int,
        auth: None = Depends(deps.require_api_token),
        deleter: deps.StoreDeleter = Depends(deps.get_store_deleter),
    ) -> None:
        deleter(store_id)

    @application.get(
        "/stores/{store_id}/categories",
        response_model=list[Category],
        summary="List the store's categories in aisle order",
    )
    def stores_categories(
        store_id: int,
        provider: deps.StoreCategoryProvider = Depends(deps.get_store_category_provider),
    ) -> list[Category]:
        return provider(store_id)

    @application.post(
        "/stores/{store_id}/categories",
        response_model=Store,
        summary="Append a category to the store",
    )
    def stores_categories_add(
        store_id: int,
        payload: StoreCategoryAddRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        adder: deps.StoreCategoryAdder = Depends(deps.get_store_category_adder),
    ) -> Store:
        return adder(store_id, payload.category_id)

    @application.put(
        "/stores/{store_id}/categories",
        response_model=Store,
        summary="Reorder the store's categories",
    )
    def stores_categories_reorder(
        store_id: int,
        payload: StoreCategoryOrderRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        reorderer: deps.StoreCategoryReorderer = Depends(deps.get_store_category_reorderer),
    ) -> Store:
        return reorderer(store_id, payload.category_order)

    @application.delete(
        "/stores/{store_id}/categories/{category_id}",
        response_model=Store,
        summary="Remove a category from the store",
    )
    def stores_categories_remove(
        store_id: int,
        category_id: int,
        auth: None = Depends(deps.require_api_token),
        remover: deps.StoreCategoryRemover = Depends(deps.get_store_category_remover),
    ) -> Store:
        return remover(store_id, category_id)

    @application.get(
        "/stores/{store_id}/view",
        response_model=StoreProductView,
        summary="Products available at the store, grouped in aisle order",
    )
    def stores_view(
        store_id: int,
        list_id: Optional[int] = Query(default=None, ge=1),
        store_fetcher: deps.StoreFetcher = Depends(deps.get_store_fetcher),
        list_fetcher: deps.ShoppingListFetcher = Depends(deps.get_shopping_list_fetcher),
        product_provider: deps.ProductProvider = Depends(deps.get_product_provider),
        category_provider: deps.CategoryProvider = Depends(deps.get_category_provider),
    ) -> StoreProductView:
        store = _fetch_store(store_fetcher, store_id)
        products = product_provider(None, None)
        checked: frozenset[int] = frozenset()
        if list_id is not None:
            shopping_list = list_fetcher(list_id)
            if shopping_list is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list not found"
                )
            on_list = set(shopping_list.product_ids)
            products = [product for product in products if product.id in on_list]
            checked = shopping_list.checked_product_ids
        return build_store_view(store, products, category_provider(), checked_product_ids=checked)

    @application.get(
        "/stores/{store_id}/shopping",
        response_model=StoreShoppingView,
        summary="Every list's products at the store, with progress",
    )
    def stores_shopping(
        store_id: int,
        store_fetcher: deps.StoreFetcher = Depends(deps.get_store_fetcher),
        list_provider: deps.ShoppingListProvider = Depends(deps.get_shopping_list_provider),
        product_provider: deps.ProductProvider = Depends(deps.get_product_provider),
        category_provider: deps.CategoryProvider = Depends(deps.get_category_provider),
    ) -> StoreShoppingView:
        store = _fetch_store(store_fetcher, store_id)
        return build_store_shopping_view(
            store,
            list_provider(None, None),
            product_provider(None, None),
            category_provider(),
        )

    # Shopping lists ---------------------------------------------------------

    @application.get(
        "/shopping-lists",
        response_model=list[ShoppingList],
        summary="List shopping lists (most recently updated first)",
    )
    def shopping_lists_list(
        search: Optional[str] = Query(default=None, max_length=255),
        list_status: Optional[ListStatus] = Query(default=None, alias="status"),
        provider: deps.ShoppingListProvider = Depends(deps.get_shopping_list_provider),
    ) -> list[ShoppingList]:
        return provider(search, list_status)

    @application.post(
        "/shopping-lists",
        response_model=ShoppingList,
        status_code=status.HTTP_201_CREATED,
        summary="Create shopping list",
    )
    def shopping_lists_create(
        payload: ShoppingListCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        creator: deps.ShoppingListCreator = Depends(deps.get_shopping_list_creator),
    ) -> ShoppingList:
        return creator(payload.model_dump())

    @application.get(
        "/shopping-lists/{list_id}", response_model=ShoppingList, summary="Get shopping list"
    )
    def shopping_lists_get(
        list_id: int,
        fetcher: deps.ShoppingListFetcher = Depends(deps.get_shopping_list_fetcher),
    ) -> ShoppingList:
        shopping_list = fetcher(list_id)
        if shopping_list is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list not found"
            )
        return shopping_list

    @application.put(
        "/shopping-lists/{list_id}", response_model=ShoppingList, summary="Rename shopping list"
    )
    def shopping_lists_rename(
        list_id: int,
        payload: ShoppingListRenameRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        renamer: deps.ShoppingListRenamer = Depends(deps.get_shopping_list_renamer),
    ) -> ShoppingList:
        return renamer(list_id, payload.name)

    @application.delete(
        "/shopping-lists/{list_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete shopping list (products are kept)",
    )
    def shopping_lists_delete(
        list_id: int,
        auth: None = Depends(deps.require_api_token),
        deleter: deps.ShoppingListDeleter = Depends(deps.get_shopping_list_deleter),
    ) -> None:
        deleter(list_id)

    @application.post(
        "/shopping-lists/{list_id}/items",
        response_model=ShoppingList,
        summary="Add a product to the list (no-op when already present)",
    )
    def shopping_lists_add_item(
        list_id: int,
        payload: ShoppingListItemAddRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        adder: deps.ShoppingListItemAdder = Depends(deps.get_shopping_list_item_adder),
    ) -> ShoppingList:
        return adder(list_id, payload.product_id)

    @application.delete(
        "/shopping-lists/{list_id}/items/{product_id}",
        response_model=ShoppingList,
        summary="Remove a product from the list",
    )
    def shopping_lists_remove_item(
        list_id: int,
        product_id: int,
        auth: None = Depends(deps.require_api_token),
        remover: deps.ShoppingListItemRemover = Depends(deps.get_shopping_list_item_remover),
    ) -> ShoppingList:
        return remover(list_id, product_id)

    @application.post(
        "/shopping-lists/{list_id}/items/{product_id}/toggle",
        response_model=ShoppingList,
        summary="Toggle a product's checked state in this list",
    )
    def shopping_lists_toggle_item(
        list_id: int,
        product_id: int,
        auth: None = Depends(deps.require_api_token),
        toggler: deps.ShoppingListItemToggler = Depends(deps.get_shopping_list_item_toggler),
    ) -> ShoppingList:
        return toggler(list_id, product_id)

    @application.post(
        "/shopping-lists/{list_id}/clear-checked",
        response_model=ShoppingList,
        summary="Uncheck every item of the list",
    )
    def shopping_lists_clear_checked(
        list_id: int,
        auth: None = Depends(deps.require_api_token),
        clearer: deps.ShoppingListCheckedClearer = Depends(deps.get_shopping_list_checked_clearer),
    ) -> ShoppingList:
        return clearer(list_id)

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return application


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop the parts of pydantic error payloads that may not serialize to JSON."""

    return [
        {key: value for key, value in error.items() if key not in {"ctx", "input", "url"}}
        for error in errors
    ]


def _require_fields(payload: BaseModel) -> dict[str, Any]:
    update_payload = payload.model_dump(exclude_unset=True)
    if not update_payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update",
        )
    return update_payload


def _fetch_store(fetcher: deps.StoreFetcher, store_id: int) -> Store:
    store = fetcher(store_id)
    if store is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return store


class CategoryCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    keywords: list[str] = Field(default_factory=list)
    default_unit: Optional[str] = Field(default=None, max_length=64)


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    keywords: Optional[list[str]] = None
    default_unit: Optional[str] = Field(default=None, max_length=64)


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    amount: float = Field(gt=0, allow_inf_nan=False)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category_id: Optional[int] = Field(default=None, ge=1)
    auto_categorize: bool = Field(default=True)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Product name cannot be empty")
        return stripped


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category_id: Optional[int] = Field(default=None, ge=1)


class StoreCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    type: StoreType
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)
    category_order: Optional[list[int]] = None


class StoreUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[StoreType] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)


class StoreCategoryAddRequest(BaseModel):
    category_id: int = Field(ge=1)


class StoreCategoryOrderRequest(BaseModel):
    category_order: list[int]

    @field_validator("category_order")
    @classmethod
    def _no_duplicates(cls, value: list[int]) -> list[int]:
        duplicates = find_duplicate_ids(value)
        if duplicates:
            raise ValueError(f"category_order contains duplicate ids: {duplicates}")
        return value


class ShoppingListCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    product_ids: list[int] = Field(default_factory=list)


class ShoppingListRenameRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class ShoppingListItemAddRequest(BaseModel):
    product_id: int = Field(ge=1)


app = create_app()

__all__ = ["app", "create_app"]
