"""Thread-safe sharing of one authenticated identity."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager

from requests import Session

from .base import AuthStrategy

logger = logging.getLogger(__name__)


class SharedAuth:
    """Serialize every operation on a wrapped strategy.

    The lock is held for the whole operation, network round trip included,
    so at most one token exchange is in flight and no caller observes a
    half-updated token. Use :meth:`authorize` to refresh and inject headers
    in a single critical section. Releasing the last reference does not
    revoke anything; call :meth:`logout` explicitly for that.
    """

    def __init__(self, strategy: AuthStrategy) -> None:
        self._strategy = strategy
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"SharedAuth({self._strategy!r})"

    @classmethod
    def wrap(cls, auth: AuthStrategy | SharedAuth) -> SharedAuth:
        if isinstance(auth, SharedAuth):
            return auth
        return cls(auth)

    @property
    def strategy(self) -> AuthStrategy:
        return self._strategy

    @contextmanager
    def locked(self) -> Iterator[AuthStrategy]:
        """Hold the lock and yield the strategy for a custom atomic sequence."""

        with self._lock:
            yield self._strategy

    def login(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> bool:
        with self._lock:
            return self._strategy.login(session, user_agent, timeout=timeout)

    def logout(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> None:
        with self._lock:
            self._strategy.logout(session, user_agent, timeout=timeout)

    def apply(self, headers: MutableMapping[str, str]) -> None:
        with self._lock:
            self._strategy.apply(headers)

    def supports_oauth(self) -> bool:
        with self._lock:
            return self._strategy.supports_oauth()

    def needs_refresh(self) -> bool:
        with self._lock:
            return self._strategy.needs_refresh()

    def authorize(
        self,
        headers: MutableMapping[str, str],
        session: Session,
        user_agent: str,
        *,
        timeout: float | None = None,
    ) -> bool:
        """Refresh the token if stale, then inject auth headers.

        Returns True when a token exchange was performed. A second caller
        arriving while the first is refreshing waits for it and then finds a
        fresh token, so it does not issue another exchange.
        """

        with self._lock:
            refreshed = False
            if self._strategy.needs_refresh():
                logger.debug("Token refresh required for %r", self._strategy)
                self._strategy.login(session, user_agent, timeout=timeout)
                refreshed = True
            self._strategy.apply(headers)
            return refreshed
