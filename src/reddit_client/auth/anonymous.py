"""Anonymous (logged-out) access."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass

from requests import Session

from .base import AuthStrategy


@dataclass(slots=True)
class AnonymousAuth(AuthStrategy):
    """Strategy for public endpoints; always logged in, never expires."""

    def login(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> bool:
        return True

    def logout(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> None:
        return None

    def apply(self, headers: MutableMapping[str, str]) -> None:
        return None

    def supports_oauth(self) -> bool:
        return False

    def needs_refresh(self) -> bool:
        return False
