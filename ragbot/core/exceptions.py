"""
Custom exception classes for the application.

Each exception carries an HTTP status code, an internal message
that is logged, and a public message that is returned to callers.
"""

from typing import Any, Optional


class AppException(Exception):
    """Base exception for application errors."""

    public_message: Optional[str] = None

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error(self) -> str:
        """Message safe to return in an HTTP response."""
        return self.public_message or self.message


class ValidationError(AppException):
    """Exception raised when a request is missing required input."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            details=details,
        )


class UpstreamError(AppException):
    """Exception raised when the embedding or generation API fails."""

    public_message = "Internal server error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            details=details,
        )


class InternalError(AppException):
    """Exception raised for unexpected failures while serving a request."""

    public_message = "Internal server error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            details=details,
        )


class CorpusLoadError(AppException):
    """Exception raised when the corpus file cannot be read."""

    public_message = "Internal server error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            details=details,
        )


class ServiceNotReadyError(AppException):
    """Exception raised when a request arrives before the corpus is indexed."""

    public_message = "Service not ready"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=503,
            details=details,
        )
