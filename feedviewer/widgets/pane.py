"""Scrollable, focusable list pane with pluggable row binding.

The pane never interprets the data bound to its rows. Callers supply how a
row is looked up, formatted for display, and matched against a search query;
the defaults index ``rows`` directly, use ``Row.text``, and do a
case-insensitive substring search over the formatted text.

Redraw contract: a dirty pane repaints its whole current page on the next
``draw``. Moving the selection within the same page repaints only the old
and new rows, immediately; moving to another page marks the pane dirty.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..ansi import pad_to_width
from ..feeds.model import Feed, Item
from ..terminal import ATTR_BOLD, ATTR_DIM, ATTR_REVERSE

if TYPE_CHECKING:
    from ..terminal import TerminalController


@dataclass(frozen=True)
class FeedRef:
    feed: Feed


@dataclass(frozen=True)
class ItemRef:
    item: Item


@dataclass
class Row:
    """One display row. ``data`` is the record it stands for."""

    data: FeedRef | ItemRef | None = None
    text: str = ""
    bold: bool = False


RowLookup = Callable[[list[Row], int], "Row | None"]
RowFormatter = Callable[[Row], str]
RowMatcher = Callable[[Row, str], bool]


def _row_at_index(rows: list[Row], pos: int) -> Row | None:
    if 0 <= pos < len(rows):
        return rows[pos]
    return None


def _row_text(row: Row) -> str:
    return row.text


class Pane:
    """List widget bound to an absolute screen rectangle."""

    def __init__(
        self,
        name: str,
        term: TerminalController,
        *,
        row_at: RowLookup | None = None,
        format_row: RowFormatter | None = None,
        match_row: RowMatcher | None = None,
    ) -> None:
        self.name = name
        self.term = term
        self.x = 0
        self.y = 0
        self.width = 0
        self.height = 0
        self.pos = 0
        self.rows: list[Row] = []
        self.focused = False
        self.hidden = False
        self.dirty = True
        self.drawable = True
        self._row_at = row_at or _row_at_index
        self._format_row = format_row or _row_text
        self._match_row = match_row

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def set_geometry(self, x: int, y: int, width: int, height: int) -> None:
        self.x, self.y, self.width, self.height = x, y, width, height
        self.dirty = True

    def set_rows(self, rows: list[Row], position: int | None = None) -> None:
        """Replace all rows, keeping the position inside the new range."""
        self.rows = rows
        target = self.pos if position is None else position
        self.pos = max(0, min(target, len(rows) - 1)) if rows else 0
        self.dirty = True

    def row(self, pos: int) -> Row | None:
        if pos < 0 or pos >= len(self.rows):
            return None
        return self._row_at(self.rows, pos)

    def selected_row(self) -> Row | None:
        return self.row(self.pos)

    def row_text(self, pos: int) -> str:
        row = self.row(pos)
        return "" if row is None else self._format_row(row)

    def matches(self, pos: int, query: str) -> bool:
        row = self.row(pos)
        if row is None:
            return False
        if self._match_row is not None:
            return self._match_row(row, query)
        return query.casefold() in self._format_row(row).casefold()

    def page_start(self, pos: int | None = None) -> int:
        """Return the first row index of the page holding ``pos``."""
        if pos is None:
            pos = self.pos
        if self.height <= 0:
            return pos
        return pos - (pos % self.height)

    def set_focus(self, focused: bool) -> None:
        if self.focused != focused:
            self.focused = focused
            self.dirty = True

    def set_position(self, target: int) -> None:
        """Select row ``target``, clamped into the row range."""
        if not self.rows:
            return
        target = max(0, min(target, len(self.rows) - 1))
        if target == self.pos:
            return
        if self.height <= 0 or self.page_start(target) != self.page_start():
            self.pos = target
            self.dirty = True
            return
        previous = self.pos
        self.pos = target
        self.draw_row(previous)
        self.draw_row(target)

    def scroll_by(self, n: int) -> None:
        self.set_position(self.pos + n)

    def scroll_pages(self, pages: int) -> None:
        """Move ``pages`` pages up or down, landing on a page boundary.

        Paging up lands on the last row of the target page, paging down on
        its first row.
        """
        height = max(1, self.height)
        if pages < 0:
            self.set_position(self.pos + pages * height - (self.pos % height) + height - 1)
        elif pages > 0:
            self.set_position(self.pos + pages * height - (self.pos % height))

    def go_first(self) -> None:
        self.set_position(0)

    def go_last(self) -> None:
        self.set_position(len(self.rows) - 1)

    def search(self, query: str, direction: int) -> bool:
        """Select the next matching row in ``direction``; no wraparound."""
        if not self.rows:
            return False
        if direction > 0:
            candidates = range(self.pos + 1, len(self.rows))
        else:
            candidates = range(self.pos - 1, -1, -1)
        for pos in candidates:
            if self.matches(pos, query):
                self.set_position(pos)
                return True
        return False

    def _can_paint(self) -> bool:
        return self.drawable and not self.hidden and self.width > 0 and self.height > 0

    def draw_row(self, pos: int) -> None:
        """Repaint one row now unless a full repaint is already pending."""
        if self.dirty or not self._can_paint():
            return
        if self.page_start(pos) != self.page_start():
            return
        self._paint_row(pos)

    def _paint_row(self, pos: int) -> None:
        row = self.row(pos)
        self.term.move(self.y + (pos % self.height), self.x)
        attrs: tuple[str, ...] = ()
        if row is not None and pos == self.pos:
            attrs = (ATTR_REVERSE,) if self.focused else (ATTR_DIM, ATTR_REVERSE)
        elif row is not None and row.bold:
            attrs = (ATTR_BOLD,)
        self.term.set_attrs(*attrs)
        if row is None:
            self.term.write(" " * self.width)
        else:
            self.term.write(pad_to_width(self._format_row(row), self.width))
        if attrs:
            self.term.reset_attrs()

    def draw(self) -> None:
        """Repaint the whole current page if the pane is dirty."""
        if not self.dirty or not self._can_paint():
            return
        start = self.page_start()
        for offset in range(self.height):
            self._paint_row(start + offset)
        self.dirty = False
