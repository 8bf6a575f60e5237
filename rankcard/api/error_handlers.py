"""Error Handlers — global exception handlers for the rank card API.

Invariants:
    - RankCardError → its own http_status with {"error": message}
    - Starlette HTTPException (unknown path etc.) → same flat envelope
    - Any 405 from routing carries the MethodNotAllowedError message, whatever the verb
    - Exception (catch-all) → 500 {"error": ...}
    - Every non-200 body is a JSON object with a single "error" key

Design Decisions:
    - Three-layer handler: domain (RankCardError), protocol (HTTPException), catch-all (Exception)
    - Internal messages are exposed on 500s unless settings.expose_internal_errors is off;
      clients of the card endpoint read them to diagnose bad avatar URLs and upstream outages
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rankcard.config import get_settings
from rankcard.core.errors import (
    MethodNotAllowedError,
    RankCardError,
    UnhandledPipelineError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_rank_card_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_rank_card_error_handler(app: FastAPI) -> None:
    """Register rank card domain/pipeline error handler."""

    @app.exception_handler(RankCardError)
    async def rank_card_error_handler(request: Request, exc: RankCardError):
        """Handle all rank card errors."""
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.http_status >= 500:
            logger.error(
                f"RankCardError: {exc.message}", extra=extra,
                exc_info=exc.__cause__ is not None,
            )
        else:
            logger.warning(f"Rejected card request: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=_build_error_body(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing-level HTTP errors."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        logger.warning(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            content = MethodNotAllowedError(request.method).to_response()
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        message = str(exc) if get_settings().expose_internal_errors else ""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": message or GENERIC_ERROR_MESSAGE},
        )


def _build_error_body(exc: RankCardError) -> dict:
    """Error envelope, masking pipeline failures when exposure is disabled."""
    if isinstance(exc, UnhandledPipelineError) and not get_settings().expose_internal_errors:
        return {"error": GENERIC_ERROR_MESSAGE}
    return exc.to_response()
