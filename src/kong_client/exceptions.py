"""
Exception hierarchy for the Kong admin client.

Every exception maps to an HTTP status code returned by the Kong Admin API,
or to a client-side failure (bad arguments, transport problems, undecodable
payloads). The Kong error body (``message``, ``name``, ``code``, ``fields``)
is preserved on the exception.
"""

from typing import Any, Dict, Optional


class KongClientError(Exception):
    """
    Base exception for all Kong client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if applicable)
        error_code: Kong error code from the response body (if any)
        details: Additional error details from the response
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"error_code={self.error_code!r})"
        )


# =============================================================================
# Client-side Errors
# =============================================================================


class InvalidArgumentError(KongClientError, ValueError):
    """An operation was called with a missing or empty required argument."""

    def __init__(
        self,
        message: str = "Invalid argument",
        *,
        argument: Optional[str] = None,
    ):
        details = {"argument": argument} if argument else None
        super().__init__(message, details=details)
        self.argument = argument


class DecodeError(KongClientError):
    """A response payload could not be decoded into the expected model."""

    def __init__(
        self,
        message: str = "Failed to decode response",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# =============================================================================
# Authentication / Authorization Errors (401, 403)
# =============================================================================


class AuthenticationError(KongClientError):
    """
    The admin token is missing or invalid.

    Kong Enterprise returns 401 when RBAC is enforced and no valid
    ``Kong-Admin-Token`` header was sent.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        *,
        status_code: int = 401,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


class AuthorizationError(KongClientError):
    """The admin behind the token lacks permission for the operation."""

    def __init__(
        self,
        message: str = "Access denied",
        *,
        status_code: int = 403,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(KongClientError):
    """
    Kong rejected the request payload.

    Kong reports per-field problems under ``fields``; those are exposed as
    ``field_errors``.
    """

    def __init__(
        self,
        message: str = "Validation error",
        *,
        status_code: int = 400,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        field_errors: Optional[Dict[str, Any]] = None,
    ):
        if field_errors:
            details = details or {}
            details["field_errors"] = field_errors
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )
        self.field_errors = field_errors or {}


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(KongClientError):
    """The requested entity does not exist."""

    def __init__(
        self,
        message: str = "Not found",
        *,
        status_code: int = 404,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(KongClientError):
    """
    A unique constraint was violated.

    Raised e.g. when creating a consumer group whose name already exists.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        *,
        status_code: int = 409,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


# =============================================================================
# Rate Limit Errors (429)
# =============================================================================


class RateLimitError(KongClientError):
    """Rate limit exceeded; ``retry_after`` holds the advertised delay."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        status_code: int = 429,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )
        self.retry_after = retry_after


# =============================================================================
# Server Errors (5xx)
# =============================================================================


class ServerError(KongClientError):
    """Kong returned a 5xx status code."""

    def __init__(
        self,
        message: str = "Server error",
        *,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


class ServiceUnavailableError(ServerError):
    """Kong (or its database) is temporarily unavailable."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        status_code: int = 503,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )
        self.retry_after = retry_after


# =============================================================================
# Network Errors (Client-side)
# =============================================================================


class NetworkError(KongClientError):
    """Connection problem, DNS failure or another transport-level issue."""

    def __init__(
        self,
        message: str = "Network error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=None,
            error_code=None,
            details=details,
        )


class TimeoutError(NetworkError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# =============================================================================
# Exception Mapping
# =============================================================================

STATUS_CODE_EXCEPTIONS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
    500: ServerError,
    502: ServerError,
    503: ServiceUnavailableError,
    504: ServerError,
}


def exception_from_response(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> KongClientError:
    """
    Create an appropriate exception from an HTTP response.

    Unmapped 5xx codes become ``ServerError``; anything else unmapped
    becomes a plain ``KongClientError``.
    """
    exception_class = STATUS_CODE_EXCEPTIONS.get(status_code)
    if exception_class is None:
        exception_class = ServerError if 500 <= status_code < 600 else KongClientError
    return exception_class(
        message,
        status_code=status_code,
        error_code=error_code,
        details=details,
    )


def is_not_found(error: BaseException) -> bool:
    """Return True if ``error`` is a Kong 404 response."""
    return isinstance(error, KongClientError) and error.status_code == 404
