"""
Exception hierarchy for the OpenSearch security client.

Two kinds of failure abort a call: the request could not be built
(``RequestBuildError``) or the transport could not complete it
(``NetworkError`` and its subclasses). HTTP error statuses are never raised
by the endpoint layer; they come back as a normal ``Response``. The
status-mapped classes below are only raised on request, through
``Response.raise_for_status()``.
"""

from typing import Any, Dict, Optional


class SecurityClientError(Exception):
    """
    Base exception for all security client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if applicable)
        error_type: OpenSearch error type (e.g., "security_exception")
        details: Additional error details from the response
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_type:
            parts.insert(0, f"[{self.error_type}]")
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"error_type={self.error_type!r})"
        )


# =============================================================================
# Request Construction Errors
# =============================================================================


class RequestBuildError(SecurityClientError):
    """
    The HTTP request could not be constructed.

    Raised before anything reaches the transport, e.g. for an unsupported
    method, an unparsable path or a body of a type httpx cannot send.
    """

    def __init__(
        self,
        message: str = "Failed to build request",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# =============================================================================
# Network Errors (Client-side)
# =============================================================================


class NetworkError(SecurityClientError):
    """
    Network-level error occurred.

    Raised by the transport when there's a connection problem, DNS failure,
    or other network-related issue.
    """

    def __init__(
        self,
        message: str = "Network error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=None,
            error_type=None,
            details=details,
        )


class TimeoutError(NetworkError):
    """Request timed out or its context deadline has passed."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class ConnectionError(NetworkError):
    """Failed to establish connection to the cluster."""

    def __init__(
        self,
        message: str = "Failed to connect to cluster",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class RequestCancelledError(NetworkError):
    """The request's context was cancelled before it was sent."""

    def __init__(
        self,
        message: str = "Request cancelled",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# =============================================================================
# HTTP Status Errors (opt-in via Response.raise_for_status)
# =============================================================================


class ValidationError(SecurityClientError):
    """The cluster rejected the request as malformed (400)."""

    def __init__(
        self,
        message: str = "Bad request",
        *,
        status_code: int = 400,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class AuthenticationError(SecurityClientError):
    """
    Authentication failed or credentials are invalid (401).

    Raised when:
    - No credentials were configured on the transport
    - Invalid username/password
    - Expired or invalid bearer token
    """

    def __init__(
        self,
        message: str = "Authentication required",
        *,
        status_code: int = 401,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class AuthorizationError(SecurityClientError):
    """
    Access denied due to insufficient permissions (403).

    The security REST API is restricted to admin certificates or users with
    the ``restapi:admin/*`` permissions.
    """

    def __init__(
        self,
        message: str = "Access denied",
        *,
        status_code: int = 403,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class NotFoundError(SecurityClientError):
    """The requested role or role mapping does not exist (404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        *,
        status_code: int = 404,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class ConflictError(SecurityClientError):
    """The resource is reserved, hidden or otherwise conflicting (409)."""

    def __init__(
        self,
        message: str = "Conflict",
        *,
        status_code: int = 409,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class RateLimitError(SecurityClientError):
    """
    Too many requests (429).

    The retry_after attribute holds the ``Retry-After`` header in seconds,
    when the cluster sent one.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        status_code: int = 429,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )
        self.retry_after = retry_after


class ServerError(SecurityClientError):
    """The cluster returned a 5xx status code."""

    def __init__(
        self,
        message: str = "Server error",
        *,
        status_code: int = 500,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


class ServiceUnavailableError(ServerError):
    """The cluster or the security index is not available (503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        status_code: int = 503,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            details=details,
        )


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
    error_type: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> SecurityClientError:
    """
    Create an appropriate exception from an HTTP error response.

    Args:
        status_code: HTTP status code
        message: Error message
        error_type: OpenSearch error type
        details: Additional error details

    Returns:
        Appropriate SecurityClientError subclass
    """
    exception_class = STATUS_CODE_EXCEPTIONS.get(status_code)
    if exception_class is None:
        exception_class = ServerError if status_code >= 500 else SecurityClientError
    return exception_class(
        message,
        status_code=status_code,
        error_type=error_type,
        details=details,
    )
