"""High-level Reddit REST client."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any
from urllib.parse import SplitResult, urljoin, urlsplit

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth.base import AuthStrategy
from .auth.shared import SharedAuth
from .config import DEFAULT_TIMEOUT, OAUTH_URL, WWW_URL, ClientConfig
from .exceptions import AuthenticationError, RedditError
from .http import HttpResponse
from .http import request as http_request
from .resources import UserResource

logger = logging.getLogger(__name__)


class RedditClient:
    """Issue authenticated requests on behalf of one shared identity."""

    def __init__(
        self,
        *,
        auth: AuthStrategy | SharedAuth,
        user_agent: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = WWW_URL,
        oauth_base_url: str = OAUTH_URL,
        default_headers: Mapping[str, str] | None = None,
        verify_ssl: bool | str | None = None,
    ) -> None:
        self._session = session or requests.Session()
        # Token calls made by the strategies go through this same session, so
        # TLS settings live on it. A caller-supplied session keeps its own
        # `verify` unless one is given explicitly.
        if verify_ssl is not None:
            self._session.verify = verify_ssl
        elif session is None:
            self._session.verify = True
        self.config = ClientConfig(
            user_agent=user_agent,
            base_url=base_url.rstrip("/"),
            oauth_base_url=oauth_base_url.rstrip("/"),
            timeout=timeout,
            verify_ssl=self._session.verify,
            default_headers=default_headers,
        )
        self._suppress_insecure_warning_if_needed()
        self.auth = SharedAuth.wrap(auth)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> RedditClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    def login(self) -> bool:
        return self.auth.login(
            self._session, self.config.user_agent, timeout=self.config.timeout
        )

    def logout(self) -> None:
        self.auth.logout(self._session, self.config.user_agent, timeout=self.config.timeout)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        oauth_required: bool = False,
    ) -> Any:
        oauth = self.auth.supports_oauth()
        if oauth_required and not oauth:
            raise AuthenticationError(f"{path} requires an OAuth login")
        url = self._resolve_url(path, oauth=oauth)
        headers = self._prepare_headers()
        self._log_request(method, url, oauth)
        response = http_request(
            self._session,
            method,
            url,
            params=params,
            headers=headers,
            timeout=self.config.timeout,
        )
        self._log_response(response)
        return response.data

    def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        oauth_required: bool = False,
    ) -> Any:
        return self.request("GET", path, params=params, oauth_required=oauth_required)

    def user(self, name: str) -> UserResource:
        return UserResource(self, name)

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _resolve_url(self, path: str, *, oauth: bool) -> str:
        parsed = urlsplit(path)
        if parsed.scheme or parsed.netloc:
            self._ensure_platform_url(parsed)
            return path
        base = self.config.resolved_base(oauth)
        return urljoin(f"{base}/", path.lstrip("/"))

    def _prepare_headers(self) -> MutableMapping[str, str]:
        headers = self.config.resolved_headers()
        self.auth.authorize(
            headers, self._session, self.config.user_agent, timeout=self.config.timeout
        )
        return headers

    def _log_request(self, method: str, url: str, oauth: bool) -> None:
        logger.info("Reddit request %s %s (oauth=%s)", method.upper(), url, oauth)

    def _log_response(self, response: HttpResponse) -> None:
        logger.debug(
            "Reddit response %s (ratelimit remaining=%s)",
            response.status_code,
            response.headers.get("x-ratelimit-remaining", "unknown"),
        )

    def _ensure_platform_url(self, parsed: SplitResult) -> None:
        origin = (parsed.scheme.lower(), parsed.netloc.lower())
        allowed = {
            (base.scheme.lower(), base.netloc.lower())
            for base in map(urlsplit, (self.config.base_url, self.config.oauth_base_url))
        }
        if origin not in allowed:
            raise RedditError(
                f"Refusing to send credentials to {parsed.scheme}://{parsed.netloc}; "
                "only the configured Reddit hosts are allowed."
            )

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
