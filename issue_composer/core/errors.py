from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .logging import record_compose_failure

logger = logging.getLogger(__name__)


class ComposeError(Exception):
    """Base error for request body composition failures."""

    message = "unable to compose the request body"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingFieldIdentifier(ComposeError):
    message = "no field id set"


class MissingOperation(ComposeError):
    message = "no update operation set"


class MissingIssuePayload(ComposeError):
    message = "no issue payload set"


class MissingTransitionIdentifier(ComposeError):
    message = "no transition id set"


class MissingIssueKey(ComposeError):
    message = "no issue key or id set"


class NoItemsToCompose(ComposeError):
    message = "no issues payload set"


class FieldEncodingError(ComposeError):
    """A custom field value could not be encoded into its JSON shape."""

    def __init__(self, field_id: str, reason: str):
        super().__init__(f"unable to encode custom field {field_id}: {reason}")
        self.field_id = field_id


class ErrorResponse(BaseModel):
    """Standard API error response."""
    error: str = Field(..., description="Short error type")
    message: str = Field(..., description="Human readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Optional extra details")


def _error_json(error: str, message: str, status_code: int, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message, details=details).model_dump(),
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException):
        return _error_json("HTTPException", str(exc.detail), exc.status_code)

    @app.exception_handler(ComposeError)
    async def compose_error_handler(request: Request, exc: ComposeError):
        record_compose_failure(request, exc)
        return _error_json(type(exc).__name__, exc.message, 400)

    @app.exception_handler(httpx.HTTPStatusError)
    async def httpx_status_error_handler(_: Request, exc: httpx.HTTPStatusError):
        logger.warning("httpx HTTPStatusError: %s", exc)
        resp = exc.response
        try:
            payload = resp.json()
        except ValueError:
            payload = {"text": resp.text}
        return _error_json(
            "UpstreamHTTPError",
            f"Upstream responded with {resp.status_code}",
            resp.status_code,
            {"upstream": payload},
        )

    @app.exception_handler(httpx.RequestError)
    async def httpx_request_error_handler(_: Request, exc: httpx.RequestError):
        logger.error("httpx RequestError: %s", exc)
        return _error_json("UpstreamRequestError", "Failed to contact upstream service", 502)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return _error_json("InternalServerError", "An unexpected error occurred", 500)
