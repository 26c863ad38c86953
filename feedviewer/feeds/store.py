"""Feed loading, counting, and read-state bookkeeping.

``FeedStore`` owns the feed list and the item array of the feed currently
shown. Only that feed keeps a file handle open; switching feeds closes the
previous handle (standard input is never closed or rewound).

Lazy mode records only each line's byte offset, recency, and timestamp. The
line is re-read from the open handle whenever it is displayed, so the file
must not shrink or reorder while it is the current feed.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterable, Iterator
from typing import BinaryIO

from ..errors import FeedReadError
from .model import FIELD_LINK, Feed, Item, parse_timestamp, split_fields
from .seen import SeenUrls

logger = logging.getLogger(__name__)

ONE_DAY_SECONDS = 86400
STDIN_FEED_NAME = "stdin"


def feeds_from_paths(paths: Iterable[str]) -> list[Feed]:
    """Build feeds named after their file basename, or one stdin feed."""
    feeds = [Feed(name=os.path.basename(path) or path, path=path) for path in paths]
    if not feeds:
        feeds.append(Feed(name=STDIN_FEED_NAME))
    return feeds


def _decode_line(raw: bytes) -> str:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    return raw.decode("utf-8", errors="replace")


class FeedStore:
    """Feed list, current item array, and recency rules."""

    def __init__(
        self,
        feeds: list[Feed],
        *,
        url_file: str | None = None,
        lazy: bool = False,
        stdin: BinaryIO | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.feeds = feeds
        self.items: list[Item] = []
        self.current: Feed | None = None
        self.url_file = url_file
        self.lazy = lazy
        self.seen: SeenUrls | None = None
        self.cutoff = 0
        self._stdin = stdin
        self._clock = clock
        self.refresh_recency()

    @property
    def total_new(self) -> int:
        return sum(feed.new for feed in self.feeds)

    @property
    def total_count(self) -> int:
        return sum(feed.total for feed in self.feeds)

    def refresh_recency(self) -> None:
        """Recompute the one-day cutoff and re-read the seen-URL list."""
        self.cutoff = int(self._clock()) - ONE_DAY_SECONDS
        self.seen = SeenUrls.from_file(self.url_file) if self.url_file else None

    def is_new(self, timestamp: int | None, link: str) -> bool:
        """Classify an item: unseen link when a URL list is set, else recent."""
        if self.seen is not None:
            return link not in self.seen
        return timestamp is not None and timestamp >= self.cutoff

    def load_all(self, current: Feed | None = None) -> None:
        """Count every feed and fully load ``current`` (default: the first)."""
        self.refresh_recency()
        target = current if current is not None else self.feeds[0]
        for feed in self.feeds:
            if feed is target:
                self.load(feed)
            else:
                self.count(feed)

    def reload(self) -> None:
        """Re-read recency data, recount all feeds, and reload the current one.

        The standard-input feed cannot be re-read and keeps its items.
        """
        current = self.current
        self.refresh_recency()
        for feed in self.feeds:
            if not feed.reloadable:
                continue
            if feed is current:
                self.load(feed)
            else:
                self.count(feed)
        logger.info("reloaded %d feeds (%d/%d new)", len(self.feeds), self.total_new, self.total_count)

    def _open(self, feed: Feed) -> BinaryIO:
        """Make ``feed`` current with a fresh handle.

        File-backed feeds are always reopened by path so a file replaced since
        the last load is read anew.
        """
        if self.current is not None and self.current is not feed:
            self._close(self.current)
        self.current = feed
        if feed.path is None:
            if feed.handle is None:
                if self._stdin is None:
                    raise FeedReadError(STDIN_FEED_NAME, OSError("standard input is not available"))
                feed.handle = self._stdin
            return feed.handle
        self._close(feed)
        try:
            feed.handle = open(feed.path, "rb")
        except OSError as exc:
            raise FeedReadError(feed.path, exc) from exc
        return feed.handle

    def _close(self, feed: Feed) -> None:
        if feed.path is None or feed.handle is None:
            return
        feed.handle.close()
        feed.handle = None

    def close(self) -> None:
        if self.current is not None:
            self._close(self.current)

    def _lines(self, feed: Feed, fp: BinaryIO) -> Iterator[tuple[int, bytes]]:
        """Yield ``(offset, raw_line)`` pairs; read errors are fatal."""
        offset = 0
        try:
            for raw in fp:
                yield offset, raw
                offset += len(raw)
        except OSError as exc:
            raise FeedReadError(feed.path or feed.name, exc) from exc

    def load(self, feed: Feed) -> list[Item]:
        """Replace the item array with every line of ``feed``.

        Standard input can only be consumed once; loading it again keeps the
        items already read.
        """
        if feed.path is None and feed is self.current and feed.handle is not None:
            return self.items

        fp = self._open(feed)
        self.items = []
        lazy = self.lazy and feed.path is not None
        items: list[Item] = []
        for offset, raw in self._lines(feed, fp):
            line = _decode_line(raw)
            fields = split_fields(line)
            timestamp = parse_timestamp(fields[0])
            item = Item(
                offset=offset,
                timestamp=timestamp,
                is_new=self.is_new(timestamp, fields[FIELD_LINK]),
            )
            if not lazy:
                item.line = line
                item.fields = fields
            items.append(item)

        self.items = items
        feed.total = len(items)
        feed.new = sum(1 for item in items if item.is_new)
        logger.debug("loaded %s: %d items, %d new", feed.name, feed.total, feed.new)
        return items

    def count(self, feed: Feed) -> None:
        """Recount ``feed`` without keeping its items."""
        if feed.path is None:
            return
        total = new = 0
        try:
            fp = open(feed.path, "rb")
        except OSError as exc:
            raise FeedReadError(feed.path, exc) from exc
        with fp:
            for _offset, raw in self._lines(feed, fp):
                fields = split_fields(_decode_line(raw))
                total += 1
                if self.is_new(parse_timestamp(fields[0]), fields[FIELD_LINK]):
                    new += 1
        feed.total = total
        feed.new = new

    def line_of(self, item: Item) -> str:
        """Return the raw record line, re-reading it in lazy mode."""
        if item.line is not None:
            return item.line
        feed = self.current
        if feed is None or feed.handle is None:
            raise FeedReadError("<no feed>", OSError("no feed file is open"))
        try:
            feed.handle.seek(item.offset)
            raw = feed.handle.readline()
        except OSError as exc:
            raise FeedReadError(feed.path or feed.name, exc) from exc
        return _decode_line(raw)

    def fields_of(self, item: Item) -> list[str]:
        if item.fields is not None:
            return item.fields
        return split_fields(self.line_of(item))

    def link_of(self, item: Item) -> str:
        return self.fields_of(item)[FIELD_LINK]

    def items_to_mark(self, start: int, end: int, read: bool) -> list[Item]:
        """Return items in ``[start, end]`` whose state differs from the target."""
        if not self.items:
            return []
        start = max(0, start)
        end = min(end, len(self.items) - 1)
        return [item for item in self.items[start : end + 1] if item.is_new == read]

    def set_read(self, items: list[Item], read: bool) -> None:
        """Apply a confirmed read/unread change to items and feed counters."""
        changed = 0
        for item in items:
            if item.is_new == read:
                item.is_new = not read
                changed += 1
        if self.current is not None and changed:
            self.current.new += -changed if read else changed
