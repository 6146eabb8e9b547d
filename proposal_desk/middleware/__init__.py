"""
Middleware package.

WHY: Middleware provides cross-cutting concerns like request correlation
that apply to all requests.
"""

from proposal_desk.middleware.request_context import (
    RequestContextMiddleware,
    get_request_id,
)

__all__ = [
    "RequestContextMiddleware",
    "get_request_id",
]
