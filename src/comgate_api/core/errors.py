"""
Exception hierarchy raised by the Comgate client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ComgateError",
    "ConfigError",
    "HTTPError",
    "RequestValidationError",
    "ResponseValidationError",
]


class ComgateError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ComgateError):
    """Raised when the supplied configuration is invalid."""


class RequestValidationError(ComgateError, ValueError):
    """Raised when request attributes are rejected before anything is sent."""


class HTTPError(ComgateError):
    """
    Raised for responses with a status outside of 2xx.

    ``body`` holds the raw response text so gateway error payloads can be
    inspected by the caller.
    """

    def __init__(
        self,
        status: int,
        body: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"HTTP error: {status}")


class ResponseValidationError(ComgateError):
    """Raised when a response body is not valid JSON or breaks the contract."""
