"""Exception hierarchy raised by the Clyp client."""

from __future__ import annotations

from typing import Optional


class ClypError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(ClypError, ValueError):
    """A value supplied by the caller breaks a construction or mutation rule.

    Raised synchronously, before any network I/O.
    """


class InvalidArgument(ValidationError):
    """An argument passed to a client operation is unusable (e.g. an empty id)."""


class TransportError(ClypError):
    """The request could not be completed or the service answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DecodingError(ClypError):
    """The response body does not have the shape the model expects."""


class UnsupportedOperation(ClypError):
    """The requested operation targets an endpoint the service no longer serves."""
