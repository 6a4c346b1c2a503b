"""Mapping of domain exceptions to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kitchenpress.utils.exceptions import (
    ConfigurationError,
    ContentGenerationError,
    DatabaseError,
    DuplicateDetectionError,
    KitchenPressError,
    ValidationError,
)
from kitchenpress.utils.logging import get_logger

logger = get_logger(__name__)

# Most specific first
STATUS_CODES = [
    (DuplicateDetectionError, 503),
    (DatabaseError, 503),
    (ContentGenerationError, 502),
    (ValidationError, 422),
    (ConfigurationError, 500),
]


def status_for(exc: KitchenPressError) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def handle_kitchenpress_error(request: Request, exc: KitchenPressError) -> JSONResponse:
    status_code = status_for(exc)
    logger.error(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=status_code,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KitchenPressError, handle_kitchenpress_error)
