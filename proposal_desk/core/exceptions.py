"""
Custom exception hierarchy for structured error handling.

WHY: Custom exceptions provide:
1. Consistent error handling across the API
2. HTTP status code mapping for FastAPI
3. Structured error responses with contextual data
4. No sensitive data leaks in error messages (OWASP A04)

The three kinds a caller can observe are Unauthorized (401), NotFound (404)
and Validation (400). NotFound deliberately covers "absent", "owned by
someone else" and "parented to a different proposal".
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    WHY: Centralizing exception handling in a base class ensures consistent
    error responses, HTTP status code mapping, and prevents sensitive data
    leaks in error messages.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any,
    ):
        """
        Initialize exception with message and context.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (overrides class default)
            **context: Additional context for debugging (filtered in to_dict)
        """
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for JSON response.

        Returns:
            Dictionary with error details (sensitive fields filtered out)
        """
        sensitive_fields = {"password", "token", "secret", "key", "api_key"}
        filtered_context = {
            k: v for k, v in self.context.items() if k.lower() not in sensitive_fields
        }

        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": filtered_context if filtered_context else None,
        }


# ============================================================================
# Authentication Exceptions (OWASP A07)
# ============================================================================


class AuthenticationError(AppException):
    """
    Raised when no identity could be resolved for the caller.

    HTTP Status: 401 Unauthorized
    """

    status_code = 401
    default_message = "You must be signed in to perform this action."


class TokenExpiredError(AuthenticationError):
    """
    Raised when a bearer token has expired.

    HTTP Status: 401 Unauthorized
    """

    default_message = "Token has expired"


class TokenInvalidError(AuthenticationError):
    """
    Raised when a bearer token is malformed or has an invalid signature.

    HTTP Status: 401 Unauthorized
    """

    default_message = "Token is invalid"


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(AppException):
    """
    Raised when input validation fails.

    WHY: Validation errors should return 400 Bad Request with details
    about which fields failed validation, helping users correct their input.

    HTTP Status: 400 Bad Request
    """

    status_code = 400
    default_message = "Validation failed"


# ============================================================================
# Resource Exceptions
# ============================================================================


class ResourceNotFoundError(AppException):
    """
    Raised when a requested resource doesn't exist for the caller.

    WHY: Records owned by another user are reported exactly like missing
    ones, so the response never reveals whether an id exists.

    HTTP Status: 404 Not Found
    """

    status_code = 404
    default_message = "Resource not found"


class ResourceAlreadyExistsError(AppException):
    """
    Raised when a caller-supplied id is already taken.

    WHY: Proposal ids may be chosen by the client and are unique across all
    owners, so a collision is a conflict rather than a server failure. The
    message is the same whoever holds the id.

    HTTP Status: 409 Conflict
    """

    status_code = 409
    default_message = "Resource already exists"
