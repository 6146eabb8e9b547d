"""
JWT token utilities.

WHY: Sign-in happens in the identity provider; requests reach this service
carrying a signed bearer token. This module verifies those tokens and can
mint new ones (used by tests and by local tooling that needs a token for a
known user id).
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
from jose import jwt, JWTError

from proposal_desk.core.config import settings
from proposal_desk.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
)


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.

    Token includes:
    - sub: The user id the token was issued for
    - exp: Expiration time (default: JWT_EXPIRATION_MINUTES)
    - iat: Issued at time
    - nbf: Not before time

    Args:
        data: Claims to encode (must include "sub")
        expires_delta: Optional custom expiration time

    Returns:
        JWT token string

    Example:
        >>> token = create_access_token({"sub": "user-1"})
        >>> verify_token(token)["sub"]
        'user-1'
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

    to_encode.update(
        {
            "exp": expire,
            "iat": now,
            "nbf": now,
        }
    )

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        TokenExpiredError: If token has expired
        TokenInvalidError: If token is malformed or signature invalid
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )

    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()

    except JWTError as e:
        raise TokenInvalidError(error=str(e))
