"""OAuth2 password-grant ("script" application) authentication."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from requests import Session

from ..clock import Clock, SystemClock, is_expired
from ..config import FORM_CONTENT_TYPE, REVOKE_URL, TOKEN_URL
from ..exceptions import AuthenticationError, DecodeError, PreconditionError
from ..http import request as http_request
from .base import AuthStrategy

logger = logging.getLogger(__name__)


class PasswordAuth(AuthStrategy):
    """Exchange a user's credentials for a short-lived bearer token.

    The token and its expiry (milliseconds since the epoch) are always set
    and cleared together. Neither changes unless the exchange or revocation
    call completed successfully, so a failed or interrupted call leaves the
    previous state in place.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
        *,
        clock: Clock | None = None,
        token_url: str = TOKEN_URL,
        revoke_url: str = REVOKE_URL,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._username = username
        self._password = password
        self._clock = clock or SystemClock()
        self._token_url = token_url
        self._revoke_url = revoke_url
        self._token: str | None = None
        self._expiration_time: int | None = None

    def __repr__(self) -> str:
        return (
            f"PasswordAuth(username={self._username!r}, "
            f"token_defined={self._token is not None}, "
            f"expires_at={self._expiration_time or 0})"
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def username(self) -> str:
        return self._username

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def expiration_time(self) -> int | None:
        return self._expiration_time

    def login(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> bool:
        from requests.auth import _basic_auth_str

        headers = {
            "Authorization": _basic_auth_str(self._client_id, self._client_secret),
            "User-Agent": user_agent,
            "Content-Type": FORM_CONTENT_TYPE,
        }
        form = {
            "grant_type": "password",
            "username": self._username,
            "password": self._password,
        }
        response = http_request(
            session,
            "POST",
            self._token_url,
            headers=headers,
            data_payload=form,
            timeout=timeout,
        )
        token, expires_in = self._parse_token_payload(response.data)

        self._token, self._expiration_time = token, self._clock.now_millis() + expires_in * 1000
        logger.info(
            "Obtained access token for %s (expires_in=%ss, expires_at=%s)",
            self._username,
            expires_in,
            self._expiration_time,
        )
        return True

    def logout(
        self, session: Session, user_agent: str, *, timeout: float | None = None
    ) -> None:
        if self._token is None:
            raise PreconditionError("Cannot revoke a token before logging in.")
        # Revocation is authenticated by the token itself; no Basic header.
        headers = {"User-Agent": user_agent, "Content-Type": FORM_CONTENT_TYPE}
        form = {"token": self._token, "token_type_hint": "access_token"}
        http_request(
            session,
            "POST",
            self._revoke_url,
            headers=headers,
            data_payload=form,
            expect_json=False,
            timeout=timeout,
        )
        self._token, self._expiration_time = None, None
        logger.info("Revoked access token for %s", self._username)

    def apply(self, headers: MutableMapping[str, str]) -> None:
        if self._token is None:
            raise PreconditionError(
                "No access token held; call login() before issuing requests."
            )
        headers["Authorization"] = f"Bearer {self._token}"

    def supports_oauth(self) -> bool:
        return True

    def needs_refresh(self) -> bool:
        return is_expired(self._expiration_time, self._clock.now_millis())

    @staticmethod
    def _parse_token_payload(payload: Any) -> tuple[str, int]:
        if not isinstance(payload, Mapping):
            raise DecodeError("Token response was not a JSON object", details=payload)
        if "error" in payload:
            # The token endpoint reports bad credentials with a 200 status.
            raise AuthenticationError(
                f"Token exchange rejected: {payload['error']}", details=payload.get("error")
            )
        token = payload.get("access_token")
        expires_in = payload.get("expires_in")
        if not isinstance(token, str) or not token:
            raise DecodeError("Token response is missing 'access_token'", details=payload)
        if not isinstance(expires_in, int) or isinstance(expires_in, bool):
            raise DecodeError("Token response is missing 'expires_in'", details=payload)
        return token, expires_in
