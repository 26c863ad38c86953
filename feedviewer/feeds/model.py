"""Feed and item records plus their display formatting.

An item is one line of a feed file: eight tab-separated fields (timestamp,
title, link, content, content-type, id, author, enclosure). Missing trailing
fields are empty strings; tabs beyond the seventh stay inside the last field.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import BinaryIO

from ..ansi import display_width, pad_to_width

FIELD_TIMESTAMP = 0
FIELD_TITLE = 1
FIELD_LINK = 2
FIELD_CONTENT = 3
FIELD_CONTENT_TYPE = 4
FIELD_ID = 5
FIELD_AUTHOR = 6
FIELD_ENCLOSURE = 7
FIELD_COUNT = 8

DATE_FORMAT = "%Y-%m-%d %H:%M"
DATE_WIDTH = 16

_TIMESTAMP_RE = re.compile(r"\s*[+-]?[0-9]+")


@dataclass(eq=False)
class Feed:
    """One feed source. ``path`` is ``None`` for standard input."""

    name: str
    path: str | None = None
    total: int = 0
    new: int = 0
    handle: BinaryIO | None = field(default=None, repr=False)

    @property
    def reloadable(self) -> bool:
        return self.path is not None

    @property
    def counts_label(self) -> str:
        return f"({self.new}/{self.total})"


@dataclass(eq=False)
class Item:
    """One parsed feed line.

    In lazy mode ``line`` and ``fields`` are ``None`` and the line is re-read
    from ``offset`` whenever it is displayed. ``timestamp`` is ``None`` when
    the first field is missing or not an integer.
    """

    offset: int
    timestamp: int | None
    is_new: bool = False
    line: str | None = None
    fields: list[str] | None = None

    @property
    def lazy(self) -> bool:
        return self.fields is None


def split_fields(line: str) -> list[str]:
    """Split a record line into exactly ``FIELD_COUNT`` fields."""
    fields = line.split("\t", FIELD_COUNT - 1)
    if len(fields) < FIELD_COUNT:
        fields.extend([""] * (FIELD_COUNT - len(fields)))
    return fields


def parse_timestamp(value: str) -> int | None:
    """Parse a decimal UNIX timestamp; fractions and junk are rejected."""
    if not _TIMESTAMP_RE.fullmatch(value):
        return None
    return int(value)


def format_date(timestamp: int | None) -> str:
    """Return local ``YYYY-mm-dd HH:MM`` or blank cells for an unknown time."""
    if timestamp is None:
        return " " * DATE_WIDTH
    try:
        return time.strftime(DATE_FORMAT, time.localtime(timestamp))
    except (OverflowError, OSError, ValueError):
        return " " * DATE_WIDTH


def format_item_text(fields: list[str], timestamp: int | None) -> str:
    """Build an item row: enclosure marker, date, title."""
    marker = "@" if fields[FIELD_ENCLOSURE] else " "
    return f"{marker} {format_date(timestamp)} {fields[FIELD_TITLE]}"


def feed_label_width(feeds: list[Feed]) -> int:
    """Return the sidebar width needed for ``name (new/total)`` labels."""
    width = 0
    for feed in feeds:
        width = max(width, display_width(f"{feed.name} {feed.counts_label}"))
    return width


def format_feed_label(feed: Feed, width: int) -> str:
    """Pad or truncate the feed name so the counts end at ``width``."""
    counts = feed.counts_label
    return pad_to_width(feed.name, width - len(counts)) + counts
