"""
errors.py — JSON error responses shared by the API routers.

Every failure body carries `"success": false` and an `error` message so the
client can surface it directly. Internal errors expose a generic message; the
stack trace is only attached in development mode.
"""

import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from findash.core.config import Settings, get_settings
from findash.core.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"
MISSING_PARAMS_MESSAGE = "Missing required query params: company, metric"


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def internal_error_response(exc: Exception, app_settings: Settings, endpoint: str) -> JSONResponse:
    """Log an unexpected exception and build the 500 body."""
    logger.error(f"Error in {endpoint}: {exc}", exc_info=exc)

    extra: Dict[str, Any] = {}
    if app_settings.is_development:
        extra["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error_response(500, GENERIC_ERROR_MESSAGE, **extra)


def register_exception_handlers(app: FastAPI) -> None:
    """Fallback for exceptions raised outside the per-endpoint handling (e.g. dependencies)."""

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return internal_error_response(exc, get_settings(), request.url.path)
