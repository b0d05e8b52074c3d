"""Custom exception hierarchy for the Reddit client."""
from __future__ import annotations

from typing import Any


class RedditError(RuntimeError):
    """Base error for Reddit client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthenticationError(RedditError):
    """Raised when credentials are rejected or an OAuth-only call runs anonymously."""


class PreconditionError(AuthenticationError):
    """Raised when a token-dependent operation runs before a successful login."""


class TransportError(RedditError):
    """Raised when the platform cannot be reached at all."""


class HttpStatusError(RedditError):
    """Raised when the platform answers with a non-success status."""


class DecodeError(RedditError):
    """Raised when the API returns an unexpected payload structure."""
