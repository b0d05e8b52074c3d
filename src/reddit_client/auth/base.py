"""Base abstractions for auth strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping

from requests import Session


class AuthStrategy(ABC):
    """Interface each authentication mechanism must implement.

    ``login`` and ``logout`` may talk to the network through the caller's
    session; ``apply``, ``supports_oauth`` and ``needs_refresh`` never do.
    Strategies are not thread-safe on their own; share them through
    :class:`~reddit_client.auth.shared.SharedAuth`.
    """

    @abstractmethod
    def login(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> bool:
        """Obtain credentials. Returns True on success, raises otherwise."""

    @abstractmethod
    def logout(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> None:
        """Release or revoke the held credentials."""

    @abstractmethod
    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Mutate headers in-place with the necessary credentials."""

    @abstractmethod
    def supports_oauth(self) -> bool:
        """Whether requests made with this strategy carry a bearer token."""

    @abstractmethod
    def needs_refresh(self) -> bool:
        """Whether ``login`` must run again before the next request."""
