"""HTTP utilities for Reddit API access."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

import requests
from requests import Response, Session

from .exceptions import DecodeError, HttpStatusError, TransportError


@dataclass(slots=True)
class HttpResponse:
    """Typed response wrapper with helper accessors."""

    status_code: int
    data: Any
    headers: Mapping[str, str]


def ensure_success(response: Response) -> None:
    """Raise `HttpStatusError` if the response signals a failure."""

    if 200 <= response.status_code < 300:
        return
    message = f"Reddit API error {response.status_code}: {response.text[:200]}"
    raise HttpStatusError(message, status_code=response.status_code, details=response.text[:200])


def parse_json(response: Response) -> Any:
    """Parse JSON with helpful error context."""

    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            "Response did not contain valid JSON",
            status_code=response.status_code,
            details=response.text[:200],
        ) from exc


def request(
    session: Session,
    method: str,
    url: str,
    *,
    params: Mapping[str, str] | None = None,
    headers: MutableMapping[str, str] | None = None,
    data_payload: Any | None = None,
    expect_json: bool = True,
    timeout: float | tuple[float, float] | None = None,
) -> HttpResponse:
    """Make a request and return a parsed response envelope."""

    try:
        response = session.request(
            method=method,
            url=url,
            params=params,
            headers=headers,
            data=data_payload,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        reason = str(exc).strip() or exc.__class__.__name__
        raise TransportError(
            f"Failed to communicate with Reddit API: {reason}", details=reason
        ) from exc
    ensure_success(response)

    data: Any = None
    if response.content:
        data = parse_json(response) if expect_json else response.text

    return HttpResponse(status_code=response.status_code, data=data, headers=response.headers)
