"""Shared pytest fixtures for the Aisle test suite."""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from aisle.config import get_settings
from aisle.db.repository import reset_repository_state
from aisle.models import Category
from aisle.server.app import create_app
from tests.factories import make_category


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    """Return a test client bound to the FastAPI app, with startup seeding applied."""

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_aisle.db"
    monkeypatch.setenv("AISLE_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("AISLE_API_TOKEN", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("AISLE_DATABASE_PATH", raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def sample_categories() -> list[Category]:
    """Small category set; Meat precedes Tools so "ham" vs "hammer" exercises length."""

    return [
        make_category(1, "Dairy", ["milk", "cheese", "butter"], "L"),
        make_category(2, "Meat", ["ham", "chicken", "beef"], "kg"),
        make_category(3, "Tools", ["hammer", "drill"]),
        make_category(4, "Bakery", ["bread", "bun"], "pcs"),
    ]
