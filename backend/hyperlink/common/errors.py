"""
Error Definitions

Defines custom exception classes used in the application for unified error handling.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether to include extra error details

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class NotFoundError(AppError):
    """
    Resource Not Found Error

    Raised when requested resource does not exist.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        code: str = "not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
            status_code=404,
        )


class MessageNotFoundError(NotFoundError):
    """
    Message Not Found Error

    Raised when a key is unknown, expired or already consumed.
    The three cases are reported identically.
    """

    def __init__(self, key: str = ""):
        super().__init__(
            message="Provided key was not found",
            code="message_not_found",
        )
        self.key = key


class ValidationError(AppError):
    """
    Parameter Validation Error

    Raised when request parameters do not meet requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 422,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=status_code,
        )


class PayloadTooLargeError(AppError):
    """
    Payload Too Large Error

    Raised when an upload exceeds the configured maximum size.
    """

    def __init__(
        self,
        message: str = "Request too large",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code="payload_too_large",
            details=details,
            status_code=417,
        )


class BackendError(AppError):
    """
    Storage Backend Error

    Raised when the underlying storage operation fails (network error,
    server unavailable, encoding failure).
    """

    def __init__(
        self,
        message: str = "A server-side error occurred",
        code: str = "backend_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="backend_error",
            code=code,
            details=details,
            status_code=500,
        )


class UnsupportedBackendError(AppError):
    """
    Unsupported Backend Error

    Raised by the storage factory when asked for an unknown backend.
    Fatal at startup.
    """

    def __init__(self, client: str):
        super().__init__(
            message=f"Unsupported storage client: {client}",
            error_type="configuration_error",
            code="unsupported_backend",
            details={"client": client},
            status_code=500,
        )
        self.client = client
