"""Exception handlers rendering every failure as `{"error": message}`."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from safe_space.core.errors import SafeSpaceError

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, status_code, message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, status_code, message)
    return JSONResponse(status_code=status_code, content={"error": message})


_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(
            str(item) for item in error.get("loc", ()) if item not in _LOCATION_PREFIXES
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def handle_domain_error(request: Request, exc: SafeSpaceError) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(request, status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on `app`."""
    app.add_exception_handler(SafeSpaceError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
