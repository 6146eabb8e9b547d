"""
Access guard.

WHAT: The single check every operation passes before touching data.

WHY: Identity travels as an explicit value. Repositories receive the
Identity as an argument and never look it up from ambient request state,
which keeps ownership checks testable without an HTTP request.
"""

from dataclasses import dataclass
from typing import Optional

from proposal_desk.core.exceptions import AuthenticationError


@dataclass(frozen=True)
class Identity:
    """
    The resolved acting user for a request.

    Attributes:
        user_id: Opaque user identifier issued by the identity provider
    """

    user_id: str


@dataclass(frozen=True)
class RequestContext:
    """
    What the transport knows about the caller.

    Attributes:
        identity: Resolved identity, or None for anonymous callers
    """

    identity: Optional[Identity] = None


def require_identity(context: RequestContext) -> Identity:
    """
    Return the acting identity or reject the call.

    Args:
        context: Request context that may or may not carry an identity

    Returns:
        The identity attached to the context

    Raises:
        AuthenticationError: If no identity is attached
    """
    if context.identity is None:
        raise AuthenticationError()
    return context.identity
