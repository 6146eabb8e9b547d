"""
FastAPI dependencies for identity resolution.

WHY: Dependencies run before the route body, so the access guard rejects
unauthenticated calls before any repository is touched.
"""

import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from proposal_desk.core.auth import verify_token
from proposal_desk.core.exceptions import AuthenticationError
from proposal_desk.core.guard import Identity, RequestContext, require_identity

logger = logging.getLogger(__name__)


# WHY: auto_error=False so a missing header produces our own uniform
# AuthenticationError instead of FastAPI's 403
security = HTTPBearer(auto_error=False)


def resolve_identity(token: str) -> Optional[Identity]:
    """
    Turn a bearer token into an identity.

    Args:
        token: Raw JWT from the Authorization header

    Returns:
        Identity for the token's subject, or None if the token is unusable
    """
    try:
        payload = verify_token(token)
    except AuthenticationError as e:
        logger.debug(f"Rejected bearer token: {e.message}")
        return None

    # "user_id" is accepted for tokens minted before "sub" was standard
    subject = payload.get("sub") or payload.get("user_id")
    if not subject:
        return None
    return Identity(user_id=str(subject))


async def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    """
    Build the request context from the bearer token.

    Args:
        credentials: Optional bearer token

    Returns:
        RequestContext with identity set when the token is valid
    """
    identity = resolve_identity(credentials.credentials) if credentials else None
    return RequestContext(identity=identity)


async def get_current_identity(
    context: RequestContext = Depends(get_request_context),
) -> Identity:
    """
    Require an authenticated caller.

    Usage:
        @router.get("/proposals")
        async def list_proposals(identity: Identity = Depends(get_current_identity)):
            ...

    Raises:
        AuthenticationError: If no identity could be resolved
    """
    return require_identity(context)
