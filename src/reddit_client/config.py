"""Configuration helpers for the Reddit client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

WWW_URL = "https://www.reddit.com"
OAUTH_URL = "https://oauth.reddit.com"
TOKEN_URL = f"{WWW_URL}/api/v1/access_token"
REVOKE_URL = f"{WWW_URL}/api/v1/revoke_token"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "python:reddit-client-python:0.1.0"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `RedditClient`."""

    user_agent: str
    base_url: str = WWW_URL
    oauth_base_url: str = OAUTH_URL
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool | str = True
    default_headers: Mapping[str, str] | None = None

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers

    def resolved_base(self, oauth: bool) -> str:
        return self.oauth_base_url if oauth else self.base_url
