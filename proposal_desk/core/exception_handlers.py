"""
Exception handlers.

Every failure leaves the API in the ``{error, message, status_code, details}``
envelope produced by ``AppException.to_dict``. Request validation failures
are folded into the same shape as a 400 ``ValidationError`` so that clients
only ever see three kinds of expected error: 401, 404 and 400.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from proposal_desk.core.exceptions import AppException, ValidationError

logger = logging.getLogger(__name__)


def _envelope(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "status_code": status_code,
            "details": details,
        },
    )


def field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """
    Flatten pydantic errors to one entry per failing field.

    Returns:
        List of {field, message, type}, where field is the dotted location
        (e.g. "body.order_index" or "query.proposal_id")
    """
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render AuthenticationError, ResourceNotFoundError and friends."""
    logger.debug(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.__class__.__name__}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request input as a 400 ValidationError."""
    return _envelope(
        ValidationError.status_code,
        ValidationError.__name__,
        "Request validation failed",
        {"errors": field_errors(exc)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework-level errors such as unknown routes or wrong methods."""
    return _envelope(exc.status_code, "HTTPException", str(exc.detail))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort for unexpected exceptions.

    The traceback goes to the log; the client gets a generic 500 with no
    internals (OWASP A04: Insecure Design).
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _envelope(500, "InternalServerError", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install all handlers on an application.

    Args:
        app: Application to configure
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
