"""Custom exceptions for the SendGrid REST client."""

from typing import Optional


class SendGridError(Exception):
    """Base exception for all SendGrid client errors."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}


class ConfigurationError(SendGridError):
    """Raised when configuration is invalid or missing."""

    pass


class TransportError(SendGridError):
    """Raised when no usable HTTP response could be obtained.

    Covers connection, DNS and TLS failures, and 400 responses whose body
    is not the provider's structured error shape.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
        raw_body: Optional[bytes] = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.raw_body = raw_body


class DecodeError(SendGridError):
    """Raised when a response body does not parse into the expected shape."""

    def __init__(
        self,
        message: str,
        raw_body: bytes = b"",
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.raw_body = raw_body


class ApiError(SendGridError):
    """Base class for errors reported through an HTTP status code."""

    status_code: Optional[int] = None


class BadRequestError(ApiError):
    """Raised on HTTP 400 with a structured description from the provider."""

    status_code = 400

    def __init__(self, description: str, request_context: Optional[str] = None):
        super().__init__(
            f"Bad request: {description}",
            context={"request": request_context} if request_context else None,
        )
        self.description = description
        self.request_context = request_context


class UnauthorizedError(ApiError):
    """Raised on HTTP 401. Credentials must be refreshed or replaced."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InternalServerError(ApiError):
    """Raised on HTTP 500."""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)


class ServiceUnavailableError(ApiError):
    """Raised on HTTP 503."""

    status_code = 503

    def __init__(self, message: str = "Service Unavailable"):
        super().__init__(message)


class UnexpectedStatusError(ApiError):
    """Raised for any status code without a dedicated error type."""

    def __init__(
        self,
        status_code: int,
        raw_body: bytes = b"",
        description: Optional[str] = None,
    ):
        message = f"Received response code: {status_code}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)
        self.status_code = status_code
        self.raw_body = raw_body
        self.description = description
