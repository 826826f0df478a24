"""Logging setup and request logging middleware."""

from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from cloudhub.config import get_log_level

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Paths that skip request logging
SKIP_LOGGING_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"})

logger = logging.getLogger("cloudhub.requests")


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the ``cloudhub`` logger.

    Calling this more than once replaces the handler instead of stacking
    duplicates.
    """
    root = logging.getLogger("cloudhub")
    root.setLevel(level or get_log_level())
    for handler in list(root.handlers):
        if getattr(handler, "_cloudhub_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._cloudhub_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def should_skip_logging(path: str) -> bool:
    return path in SKIP_LOGGING_PATHS


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and elapsed time for each request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if should_skip_logging(request.url.path):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
