"""Proportional one-column scrollbar paired with a pane.

The scrollbar holds no state of its own beyond what was last painted; it is
recomputed from the pane every frame and repaints only when the thumb moved
or focus changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..terminal import ATTR_DIM, ATTR_REVERSE

if TYPE_CHECKING:
    from ..terminal import TerminalController

TRACK_SYMBOL = "│"


class Scrollbar:
    def __init__(self, term: TerminalController) -> None:
        self.term = term
        self.x = 0
        self.y = 0
        self.size = 0
        self.tick_pos = 0
        self.tick_size = 0
        self.focused = False
        self.hidden = False
        self.dirty = True
        self.drawable = True

    def set_geometry(self, x: int, y: int, size: int) -> None:
        self.x, self.y, self.size = x, y, size
        self.dirty = True

    def set_focus(self, focused: bool) -> None:
        if self.focused != focused:
            self.focused = focused
            self.dirty = True

    def update(self, position: int, row_count: int, page_height: int) -> None:
        """Recompute the thumb for a view starting at ``position``.

        No thumb is shown when every row fits on one page.
        """
        tick_pos = tick_size = 0
        if self.size > 0 and page_height > 0 and row_count > page_height:
            tick_size = int(self.size / (row_count / page_height))
            if tick_size == 0:
                tick_size = 1
            tick_pos = int((position / row_count) * self.size)
            # Cell rounding: pin the thumb to the bottom at the end of the view.
            if position + page_height >= row_count or tick_pos + tick_size >= self.size:
                tick_pos = self.size - tick_size

        if tick_pos != self.tick_pos or tick_size != self.tick_size:
            self.dirty = True
        self.tick_pos = tick_pos
        self.tick_size = tick_size

    def draw(self) -> None:
        if self.hidden or not self.dirty or not self.drawable:
            return
        base = () if self.focused else (ATTR_DIM,)
        for offset in range(self.size):
            self.term.move(self.y + offset, self.x)
            if self.tick_pos <= offset < self.tick_pos + self.tick_size:
                self.term.set_attrs(*base, ATTR_REVERSE)
                self.term.write(" ")
            else:
                self.term.set_attrs(*base)
                self.term.write(TRACK_SYMBOL)
            self.term.reset_attrs()
        self.dirty = False
