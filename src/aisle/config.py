"""Application configuration helpers.

Settings come from ``AISLE_*`` environment variables, falling back to ``.env`` and
``.env.local`` in the working directory. Unset or empty variables keep the defaults.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))

LogFormat = Literal["plain", "json"]


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/aisle.db"),
        description="SQLite database location.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for mutating endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: LogFormat = Field(default="plain", description="Logging format (plain/json).")
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs and HTTP metrics when true.",
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Insert the built-in category catalog on startup when no categories exist.",
    )
    default_unit: str = Field(
        default="pcs",
        min_length=1,
        description="Unit for new products when neither the request nor a suggestion has one.",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                key = key.strip().removeprefix("export ").strip()
                payload[key] = _strip_quotes(raw_value.strip())
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


_ENV_FIELDS: dict[str, tuple[str, Callable[[str], object]]] = {
    "AISLE_DATABASE_PATH": ("database_path", Path),
    "AISLE_API_TOKEN": ("api_token", str),
    "AISLE_LOG_LEVEL": ("log_level", str),
    "AISLE_LOG_FORMAT": ("log_format", str),
    "AISLE_LOG_REQUESTS": ("log_requests", _coerce_bool),
    "AISLE_SEED_ON_STARTUP": ("seed_on_startup", _coerce_bool),
    "AISLE_DEFAULT_UNIT": ("default_unit", lambda value: value.strip() or "pcs"),
}


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()
    payload: dict[str, object] = {}
    for env_key, (field_name, parse) in _ENV_FIELDS.items():
        raw = os.environ.get(env_key) or file_values.get(env_key)
        if raw:
            payload[field_name] = parse(raw)
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
