"""
Custom exceptions for the QR payment gateway.

Provides a hierarchy of typed exceptions so the HTTP boundary can map
each failure kind to a status code and a readable message.
"""

from typing import Any, Optional


class GatewayError(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        message: Text returned to the API client.
        code: Machine-readable kind, the class name unless given.
        details: Extra context (ids, provider status codes) for logs.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code else type(self).__name__
        self.details = dict(details) if details else {}

    def to_dict(self) -> dict[str, Any]:
        """Get the error body of an API response; details only when present."""
        body: dict[str, Any] = {"ok": False, "error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(GatewayError):
    """Malformed or inconsistent input."""

    pass


class NotFoundError(GatewayError):
    """Requested session or resource does not exist."""

    def __init__(
        self,
        message: str,
        resource_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.resource_id = resource_id
        if resource_id:
            self.details["id"] = resource_id


class NoActiveSessionError(GatewayError):
    """No non-expired device session is available for a remote call."""

    def __init__(
        self,
        message: str = "No active session found. Please open a device session first.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


# =============================================================================
# Remote Provider Errors
# =============================================================================


class RemoteServiceError(GatewayError):
    """The payment provider failed or answered with a business error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        if status_code is not None:
            self.details["status_code"] = status_code


class RemoteTimeoutError(RemoteServiceError):
    """The payment provider did not answer before the deadline."""

    pass


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(GatewayError):
    """Session persistence read or write failure."""

    pass
