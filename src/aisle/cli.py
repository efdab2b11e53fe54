"""Command-line interface for Aisle."""

from __future__ import annotations

import json
from typing import Optional

import typer

from aisle.categorize import suggest_for_product
from aisle.config import get_settings
from aisle.db.categories import list_categories, seed_default_categories
from aisle.db.products import list_products
from aisle.db.shopping_lists import get_shopping_list
from aisle.db.stores import get_store
from aisle.logging_utils import configure_logging
from aisle.store_view import build_store_view

app = typer.Typer(help="Aisle shopping list commands.")


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def _echo_json(payload: dict, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command()
def seed() -> None:
    """Insert the built-in categories into an empty database."""

    inserted = seed_default_categories()
    if inserted:
        typer.echo(f"Seeded {inserted} categories.")
    else:
        typer.echo("Categories already present; nothing seeded.")


@app.command()
def suggest(
    name: str = typer.Argument(..., help="Product name to categorize."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Suggest a category for a product name using the longest matching keyword.
    """

    suggestion = suggest_for_product(name, list_categories(sort="id"))
    if suggestion is None:
        typer.echo(f"No category matches {name!r}.", err=True)
        raise typer.Exit(code=1)
    _echo_json(suggestion.model_dump(mode="json"), pretty)


@app.command("store-view")
def store_view(
    store_id: int = typer.Argument(..., help="Store ID to build the view for."),
    list_id: Optional[int] = typer.Option(
        None,
        "--list-id",
        help="Restrict the view to the products of this shopping list.",
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Show products available at a store, grouped in the store's aisle order."""

    store = get_store(store_id)
    if store is None:
        typer.echo(f"Store {store_id} not found.", err=True)
        raise typer.Exit(code=1)

    products = list_products()
    checked: frozenset[int] = frozenset()
    if list_id is not None:
        shopping_list = get_shopping_list(list_id)
        if shopping_list is None:
            typer.echo(f"Shopping list {list_id} not found.", err=True)
            raise typer.Exit(code=1)
        on_list = set(shopping_list.product_ids)
        products = [product for product in products if product.id in on_list]
        checked = shopping_list.checked_product_ids

    view = build_store_view(store, products, list_categories(), checked_product_ids=checked)
    _echo_json(view.model_dump(mode="json"), pretty)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on."),
) -> None:
    """Run the HTTP API with uvicorn."""

    from aisle.server.run import serve as run_server

    run_server(host, port)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the `aisle` console script."""
    app(prog_name="aisle", args=argv)


if __name__ == "__main__":
    main()
