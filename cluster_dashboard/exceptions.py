"""Exceptions related to cluster-dashboard."""

__all__ = [
    "DashboardException",
    "InputException",
    "NetworkError",
    "ApiError",
    "ValidationError",
    "StoreError",
    "describe_error",
]


class DashboardException(Exception):
    """Generic base exception used for this library."""


class InputException(DashboardException):
    """Raised when a payload document is not formatted as expected."""


class NetworkError(DashboardException):
    """Raised when the transport fails without receiving a response."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(DashboardException):
    """Raised when a response was received with a non-success status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__(f"API error {status}: {message or 'Unknown error'}")
        self.status = status
        self.message = message


class ValidationError(DashboardException):
    """Raised when input is rejected before a remote call is issued."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


StoreError = NetworkError | ApiError | ValidationError
"""The closed set of errors surfaced through a store's state."""


def describe_error(error: StoreError) -> str:
    """Return a user facing description of a store error."""
    if isinstance(error, NetworkError):
        return f"Network error: {error.message}"
    if isinstance(error, ApiError):
        return f"Request failed ({error.status}): {error.message or 'Unknown error'}"
    if isinstance(error, ValidationError):
        return f"Invalid input: {error.message}"
    raise TypeError(f"Unsupported store error {error!r}")
