"""
Server entry point.

Runs the ASGI application under uvicorn. Uvicorn handles SIGINT/SIGTERM
and waits up to `shutdown_timeout_seconds` for in-flight requests.
"""

import uvicorn

from expense_api.core.config import settings


def run() -> None:
    """Serve the application on the configured host and port."""
    uvicorn.run(
        "expense_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )
