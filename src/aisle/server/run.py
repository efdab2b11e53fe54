"""Helper for running the Aisle ASGI application."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import uvicorn

logger = logging.getLogger(__name__)

APP_PATH = "aisle.server.app:app"


async def _serve_with_duration(server: uvicorn.Server, duration: float) -> None:
    """Run the server and shut it down after the specified duration."""

    async def _shutdown() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_shutdown())
    await server.serve()


def _parse_duration(value: str | None) -> Optional[float]:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid AISLE_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("AISLE_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    *,
    reload: Optional[bool] = None,
) -> None:
    """Run uvicorn against the module-level app.

    Arguments left as ``None`` fall back to ``AISLE_SERVER_HOST``, ``AISLE_SERVER_PORT``
    and ``RELOAD=1``. ``AISLE_SERVER_DURATION`` stops the server after that many seconds.
    """

    host = host or os.environ.get("AISLE_SERVER_HOST", "127.0.0.1")
    port = port or int(os.environ.get("AISLE_SERVER_PORT", "8000"))
    reload_enabled = os.environ.get("RELOAD") == "1" if reload is None else reload
    duration = _parse_duration(os.environ.get("AISLE_SERVER_DURATION"))

    if reload_enabled and duration is not None:
        raise SystemExit("Disable reload when specifying AISLE_SERVER_DURATION.")

    logger.info("Serving %s on %s:%s", APP_PATH, host, port)
    if reload_enabled:
        uvicorn.run(APP_PATH, host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config(APP_PATH, host=host, port=port, reload=False))
    if duration is not None:
        asyncio.run(_serve_with_duration(server, duration))
        return

    server.run()


def main() -> None:
    serve()


if __name__ == "__main__":
    main()
