"""Screen geometry for the sidebar, item list, scrollbars, and status bar.

Everything is laid out in 0-based terminal cells. The status bar always
takes the last row; both panes fill the rows above it, each followed by a
one-column scrollbar.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class ScreenLayout:
    """Absolute widget rectangles for one terminal size."""

    columns: int
    rows: int
    sidebar_visible: bool
    feeds: Rect
    feeds_scrollbar: Rect
    items: Rect
    items_scrollbar: Rect
    statusbar: Rect
    drawable: bool


def compute_layout(
    columns: int,
    rows: int,
    sidebar_visible: bool,
    sidebar_width: int,
) -> ScreenLayout:
    """Compute widget geometry.

    ``sidebar_width`` is the content width of the feed labels. Hiding the
    sidebar gives its width and its scrollbar column to the item pane.
    ``drawable`` is false when the terminal cannot hold one content row, the
    status bar, and (if shown) the sidebar next to a usable item column.
    """
    pane_height = max(0, rows - 1)
    feeds = Rect(0, 0, sidebar_width, pane_height)
    feeds_scrollbar = Rect(feeds.x + feeds.width, 0, 1, pane_height)

    if sidebar_visible:
        items_x = feeds_scrollbar.x + 1
        remaining = columns - sidebar_width - 1
    else:
        items_x = 0
        remaining = columns
    items = Rect(items_x, 0, max(0, remaining - 1), pane_height)
    items_scrollbar = Rect(items.x + items.width, 0, 1, pane_height)
    statusbar = Rect(0, max(0, rows - 1), max(0, columns), 1)

    drawable = (
        rows >= 2
        and columns >= 2
        and items.width >= 1
        and (not sidebar_visible or columns > sidebar_width + 2)
    )
    return ScreenLayout(
        columns=columns,
        rows=rows,
        sidebar_visible=sidebar_visible,
        feeds=feeds,
        feeds_scrollbar=feeds_scrollbar,
        items=items,
        items_scrollbar=items_scrollbar,
        statusbar=statusbar,
        drawable=drawable,
    )
