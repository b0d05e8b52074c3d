"""User profile and listing helpers."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .base import ResourceBase

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import RedditClient


class UserResource(ResourceBase):
    """Read a single user's profile and listings."""

    def __init__(self, client: RedditClient, name: str) -> None:
        super().__init__(client)
        self.name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserResource):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"UserResource(name={self.name!r})"

    def about(self) -> dict[str, Any]:
        return self._get(f"/user/{self.name}/about.json")

    def comments(self, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        return self._get(f"/user/{self.name}/comments.json", params=params)

    def submissions(self, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        return self._get(f"/user/{self.name}/submitted.json", params=params)

    def overview(self, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        return self._get(f"/user/{self.name}/overview.json", params=params)

    def saved(self, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Return the user's saved items.

        Only available to the logged-in owner, so an OAuth strategy is
        required.
        """

        return self._get(f"/user/{self.name}/saved.json", params=params, oauth_required=True)


def listing_children(listing: Any) -> list[dict[str, Any]]:
    """Flatten a listing payload into the ``data`` mappings of its children."""

    if not isinstance(listing, Mapping):
        return []
    data = listing.get("data")
    if not isinstance(data, Mapping):
        return []
    children = data.get("children")
    if not isinstance(children, list):
        return []
    rows: list[dict[str, Any]] = []
    for child in children:
        if isinstance(child, Mapping) and isinstance(child.get("data"), Mapping):
            row = dict(child["data"])
            row.setdefault("kind", child.get("kind"))
            rows.append(row)
    return rows


__all__ = ["UserResource", "listing_children"]
