"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        if self.keys:
            for key in self.keys:
                if key in row:
                    value = row.get(key)
                    if value is not None:
                        break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            formatted = self.formatter(value)
            return "" if formatted is None else str(formatted)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _timestamp_formatter(value: Any) -> str:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return ""
    moment = datetime.fromtimestamp(value, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M")


def _truncate_formatter(*, max_chars: int = 60) -> ValueFormatter:
    def _formatter(value: Any) -> str:
        s = " ".join(str(value).split())
        return s if len(s) <= max_chars else s[: max_chars - 1] + "…"

    return _formatter


def _newest_first(row: Row) -> Any:
    created = row.get("created_utc")
    return -created if isinstance(created, (int, float)) else 0


_SUBREDDIT = Column("Subreddit", keys=("subreddit_name_prefixed", "subreddit"))
_SCORE = Column("Score", keys=("score",), justify="right")
_CREATED = Column("Created (UTC)", keys=("created_utc",), formatter=_timestamp_formatter)


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "user.comments": TableView(
        title="Comments",
        columns=(
            _SUBREDDIT,
            _SCORE,
            Column("Comment", keys=("body",), formatter=_truncate_formatter()),
            _CREATED,
        ),
        sort_key=_newest_first,
    ),
    "user.submissions": TableView(
        title="Submissions",
        columns=(
            _SUBREDDIT,
            _SCORE,
            Column("Title", keys=("title",), formatter=_truncate_formatter()),
            Column("Comments", keys=("num_comments",), justify="right"),
            _CREATED,
        ),
        sort_key=_newest_first,
    ),
    "user.listing": TableView(
        title="Items",
        columns=(
            Column("Kind", keys=("kind",)),
            _SUBREDDIT,
            _SCORE,
            Column("Text", keys=("title", "body"), formatter=_truncate_formatter()),
            _CREATED,
        ),
        sort_key=_newest_first,
    ),
}
