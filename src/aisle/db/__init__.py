"""SQLite persistence layer for Aisle."""
