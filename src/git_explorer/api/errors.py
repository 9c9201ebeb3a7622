"""Translate analysis errors into ``{error, details?}`` JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from git_explorer.api.schemas import ErrorResponse
from git_explorer.core.errors import CloneFailure, RangeResolutionError

logger = logging.getLogger(__name__)

RANGE_ERROR_MESSAGE = "Please select a valid commit range."


def _error_response(request: Request, status_code: int, message: str, details: str | None = None) -> JSONResponse:
    debug = request.app.state.settings.debug
    body = ErrorResponse(error=message, details=details if debug else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def clone_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, CloneFailure)
    return _error_response(request, exc.status_code, exc.message, exc.details)


async def range_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RangeResolutionError)
    return _error_response(request, 400, RANGE_ERROR_MESSAGE, exc.reason)


async def http_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    return _error_response(request, exc.status_code, str(exc.detail))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return _error_response(request, 500, "Internal server error", str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CloneFailure, clone_failure_handler)
    app.add_exception_handler(RangeResolutionError, range_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
