"""Mapping of newsdesk errors to HTTP responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from newsdesk.errors import (
    ConfigurationError,
    EmptyInputError,
    InvalidCategoryError,
    InvalidTransitionError,
    NewsdeskError,
    ProviderError,
)

logger = logging.getLogger(__name__)

# First match wins; subclasses come before their parents.
ERROR_STATUS: list[tuple[type[NewsdeskError], int]] = [
    (ConfigurationError, 503),
    (InvalidCategoryError, 400),
    (EmptyInputError, 422),
    (InvalidTransitionError, 409),
    (ProviderError, 502),
]


def status_for(error: NewsdeskError) -> int:
    """HTTP status code for a newsdesk error."""
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


async def handle_newsdesk_error(request: Request, exc: NewsdeskError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})
