"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import RedditClient


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: RedditClient) -> None:
        self._client = client

    def _get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        oauth_required: bool = False,
    ) -> Any:
        return self._client.get_json(path, params=params, oauth_required=oauth_required)
