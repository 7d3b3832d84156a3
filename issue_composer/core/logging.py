from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

DIALECTS = ("rich", "plain")


def configure_logging(level: str = "INFO") -> None:
    """Install one stdout handler on the root logger and set levels."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
    # httpx logs every upstream call at INFO; only surface that when debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING)


def record_compose_failure(request: Request, exc: Exception) -> None:
    """Remember why the request body could not be composed, for the request log."""
    request.state.compose_error = type(exc).__name__


def _dialect_of(path: str) -> Optional[str]:
    # /api/v1/{dialect}/issues/...
    parts = path.strip("/").split("/")
    if len(parts) >= 3 and parts[2] in DIALECTS:
        return parts[2]
    return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its payload dialect, compose outcome, status and latency."""

    async def dispatch(self, request: Request, call_next: Callable):
        logger = logging.getLogger("issue_composer.request")
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration = (time.perf_counter() - start) * 1000.0
            status_code = getattr(response, "status_code", "n/a")
            compose_error = getattr(request.state, "compose_error", None)
            dialect = _dialect_of(request.url.path) or "-"
            if compose_error:
                logger.warning(
                    "%s %s dialect=%s rejected=%s -> %s (%.2f ms)",
                    request.method,
                    request.url.path,
                    dialect,
                    compose_error,
                    status_code,
                    duration,
                )
            else:
                logger.info(
                    "%s %s dialect=%s -> %s (%.2f ms)",
                    request.method,
                    request.url.path,
                    dialect,
                    status_code,
                    duration,
                )


def install_request_logging(app: FastAPI) -> None:
    """Attach request logging middleware to the app."""
    app.add_middleware(RequestLoggingMiddleware)
