"""
Error taxonomy shared by every layer.
Zero external dependencies.

Callers can catch CountryServiceError for any lookup failure, or one of the
subclasses to tell bad input apart from an unreachable or misbehaving API.
"""

from typing import Optional


class CountryServiceError(Exception):
    """Base class for every error raised by a country lookup."""


class InvalidArgumentError(CountryServiceError, ValueError):
    """The lookup key was rejected before any request was sent."""


class RemoteUnavailableError(CountryServiceError):
    """The API could not be reached or answered with an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CountryNotFoundError(CountryServiceError):
    """The API answered 404 for the requested code or capital."""


class MalformedResponseError(CountryServiceError):
    """The API answered, but the body does not have the expected shape."""


class LookupCancelledError(CountryServiceError):
    """An asynchronous lookup was cancelled before the exchange completed."""


class UnknownLookupError(CountryServiceError):
    """Any other failure. The original exception is kept as __cause__."""
