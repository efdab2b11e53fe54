"""ASGI application factory and dependencies for the Aisle server."""

from aisle.server.app import app, create_app

__all__ = ["app", "create_app"]
