"""
Request context middleware.

WHAT: Assigns every request a unique id and makes it available for the
whole request lifecycle.

WHY: Log lines emitted by repositories and DAOs are correlated through the
request id without threading it through every call. The id is also echoed
back to clients in the X-Request-ID header.

HOW: Uses Starlette's request state plus a ContextVar for async-safe access
from code that has no request object.
"""

import uuid
from contextvars import ContextVar
from typing import Optional, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


# WHY: ContextVar ensures each async request gets its own isolated value,
# preventing ids from leaking between concurrent requests
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """
    Get the current request id.

    Returns:
        Request id if within a request, None otherwise
    """
    return _request_id.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that generates and stores a request id.

    Example:
        @app.get("/api/example")
        async def example(request: Request):
            print(request.state.request_id)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and add the request id.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with request ID header added
        """
        # Honour an upstream id so traces line up across services
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        token = _request_id.set(request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        finally:
            _request_id.reset(token)
