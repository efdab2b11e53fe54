"""
Aisle shopping-list package.

The package exposes the keyword-based categorization engine, the store-ordered product
view builder, the SQLite-backed entity repositories, and the HTTP/CLI entry points built
on top of them.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
