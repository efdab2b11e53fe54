"""Prometheus metrics definitions for Aisle."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "aisle_http_requests_total",
    "Total number of HTTP requests processed by the Aisle API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "aisle_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Aisle API",
    ["method", "path"],
)

CATEGORY_SUGGESTIONS = Counter(
    "aisle_category_suggestions_total",
    "Category suggestions served, by outcome",
    ["result"],
)

CATEGORIES_SEEDED = Counter(
    "aisle_categories_seeded_total",
    "Number of built-in categories inserted by the seeding routine",
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "CATEGORY_SUGGESTIONS",
    "CATEGORIES_SEEDED",
]
