"""Application controller: owns the feed store, widgets, and command table.

Every command runs synchronously on the main thread. Widgets only record
what needs repainting; ``draw`` is called once per loop iteration and emits
everything in a single flush.
"""

from __future__ import annotations

import logging
import shutil
import signal
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..feeds.model import (
    FIELD_ENCLOSURE,
    FIELD_LINK,
    Feed,
    Item,
    feed_label_width,
    format_feed_label,
    format_item_text,
)
from ..input.key_registry import KeyBinding, KeyMap
from ..input.reader import MouseReport
from ..widgets.layout import ScreenLayout, compute_layout
from ..widgets.pane import FeedRef, ItemRef, Pane, Row
from ..widgets.scrollbar import Scrollbar
from ..widgets.statusbar import StatusBar
from .config import APP_NAME, Preferences, save_preferences

if TYPE_CHECKING:
    from ..feeds.store import FeedStore
    from ..input.reader import InputDecoder
    from ..terminal import TerminalController
    from .external import ExternalPrograms
    from .signals import SignalSlot

logger = logging.getLogger(__name__)

PANE_FEEDS = 0
PANE_ITEMS = 1

MOUSE_LEFT = 0
MOUSE_RIGHT = 2
MOUSE_WHEEL_UP = 3
MOUSE_WHEEL_DOWN = 4
MOUSE_BACK = 7
MOUSE_FORWARD = 8


def _match_feed_name(row: Row, query: str) -> bool:
    if not isinstance(row.data, FeedRef):
        return False
    return query.casefold() in row.data.feed.name.casefold()


class Application:
    """Top-level UI state for one feedviewer session."""

    def __init__(
        self,
        store: FeedStore,
        terminal: TerminalController,
        programs: ExternalPrograms,
        *,
        decoder: InputDecoder,
        signals: SignalSlot,
        preferences: Preferences | None = None,
        persist_preferences: Callable[[Preferences], None] = save_preferences,
        terminal_size: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.store = store
        self.terminal = terminal
        self.programs = programs
        self.decoder = decoder
        self.signals = signals
        self.preferences = preferences if preferences is not None else Preferences()
        self._persist_preferences = persist_preferences
        self._terminal_size = terminal_size or _current_terminal_size

        self.feeds_pane = Pane(
            "feeds",
            terminal,
            format_row=self._format_feed_row,
            match_row=_match_feed_name,
        )
        self.items_pane = Pane("items", terminal, format_row=self._format_item_row)
        self.panes = [self.feeds_pane, self.items_pane]
        self.scrollbars = [Scrollbar(terminal), Scrollbar(terminal)]
        self.statusbar = StatusBar(terminal)

        self.selected_pane = PANE_FEEDS
        self.sidebar_width = 0
        self.layout: ScreenLayout | None = None
        self.screen_dirty = True
        self.search_query: str | None = None
        self.keymap = self._build_keymap()

    @property
    def mouse_enabled(self) -> bool:
        return self.preferences.mouse

    @property
    def only_new(self) -> bool:
        return self.preferences.only_new

    # Row binding.

    def _format_feed_row(self, row: Row) -> str:
        if not isinstance(row.data, FeedRef):
            return row.text
        return format_feed_label(row.data.feed, self.sidebar_width)

    def _format_item_row(self, row: Row) -> str:
        if not isinstance(row.data, ItemRef):
            return row.text
        item = row.data.item
        return format_item_text(self.store.fields_of(item), item.timestamp)

    def selected_feed(self) -> Feed | None:
        row = self.feeds_pane.selected_row()
        return row.data.feed if row is not None and isinstance(row.data, FeedRef) else None

    def selected_item(self) -> Item | None:
        row = self.items_pane.selected_row()
        return row.data.item if row is not None and isinstance(row.data, ItemRef) else None

    # Loading.

    def load_initial(self) -> None:
        """Load every feed and pick the startup pane.

        Reading a single feed from standard input starts with the sidebar
        hidden and the item list focused.
        """
        self.store.load_all()
        self._show_items(0)
        stdin_only = not any(feed.reloadable for feed in self.store.feeds)
        self.feeds_pane.hidden = stdin_only
        self.scrollbars[PANE_FEEDS].hidden = stdin_only
        self.selected_pane = PANE_ITEMS if stdin_only else PANE_FEEDS
        self.update_sidebar(position=0)

    def _show_items(self, position: int) -> None:
        rows = [Row(data=ItemRef(item), bold=item.is_new) for item in self.store.items]
        self.items_pane.set_rows(rows, position)
        self.scrollbars[PANE_ITEMS].dirty = True

    def open_feed(self, feed: Feed) -> None:
        self.store.load(feed)
        self._show_items(0)
        self.update_sidebar()
        self.update_title()

    def update_sidebar(self, position: int | None = None) -> None:
        """Rebuild feed rows and recompute the sidebar width.

        With the new-only filter on, feeds without new items are left out.
        """
        feeds = [feed for feed in self.store.feeds if not self.only_new or feed.new > 0]
        width = feed_label_width(feeds)
        rows = [Row(data=FeedRef(feed), bold=feed.new > 0) for feed in feeds]
        self.feeds_pane.set_rows(rows, position)
        self.scrollbars[PANE_FEEDS].dirty = True
        if width != self.sidebar_width or self.layout is None:
            self.sidebar_width = width
            self.update_geometry()

    # Screen.

    def update_geometry(self) -> None:
        """Recompute widget geometry from the terminal size and repaint all."""
        columns, rows = self._terminal_size()
        layout = compute_layout(columns, rows, not self.feeds_pane.hidden, self.sidebar_width)
        self.layout = layout
        self.feeds_pane.set_geometry(layout.feeds.x, layout.feeds.y, layout.feeds.width, layout.feeds.height)
        self.items_pane.set_geometry(layout.items.x, layout.items.y, layout.items.width, layout.items.height)
        feeds_bar, items_bar = self.scrollbars
        feeds_bar.set_geometry(layout.feeds_scrollbar.x, layout.feeds_scrollbar.y, layout.feeds_scrollbar.height)
        items_bar.set_geometry(layout.items_scrollbar.x, layout.items_scrollbar.y, layout.items_scrollbar.height)
        self.statusbar.set_geometry(layout.statusbar.x, layout.statusbar.y, layout.statusbar.width)
        for widget in (*self.panes, *self.scrollbars, self.statusbar):
            widget.drawable = layout.drawable
        self.mark_all_dirty()
        logger.debug("geometry %dx%d drawable=%s", columns, rows, layout.drawable)

    def mark_all_dirty(self) -> None:
        self.screen_dirty = True
        for widget in (*self.panes, *self.scrollbars, self.statusbar):
            widget.dirty = True

    def status_text(self) -> str:
        item = self.selected_item()
        return "" if item is None else self.store.link_of(item)

    def draw(self) -> None:
        if self.layout is not None and self.layout.drawable:
            if self.screen_dirty:
                self.terminal.clear_screen()
                self.screen_dirty = False
            self.statusbar.update(self.status_text())
            for index, (pane, scrollbar) in enumerate(zip(self.panes, self.scrollbars)):
                focused = index == self.selected_pane
                pane.set_focus(focused)
                pane.draw()
                scrollbar.set_focus(focused)
                scrollbar.update(pane.page_start(), pane.row_count, pane.height)
                scrollbar.draw()
            self.statusbar.draw()
        self.terminal.flush()

    def update_title(self) -> None:
        self.terminal.set_title(f"({self.store.total_new}/{self.store.total_count}) - {APP_NAME}")

    # Focus.

    def cycle_pane(self, step: int) -> None:
        """Move focus ``step`` visible panes left or right, without wrapping."""
        index = self.selected_pane
        remaining = abs(step)
        direction = 1 if step > 0 else -1
        probe = index
        while remaining and 0 <= probe + direction < len(self.panes):
            probe += direction
            if self.panes[probe].hidden:
                continue
            remaining -= 1
            index = probe
        self.selected_pane = index

    def cycle_tab(self) -> None:
        """Focus the next visible pane, wrapping to the first one."""
        previous = self.selected_pane
        self.cycle_pane(1)
        if self.selected_pane == previous:
            self.cycle_pane(-len(self.panes))

    def focused_pane(self) -> Pane:
        return self.panes[self.selected_pane]

    # Commands.

    def _prompt_interrupted(self) -> bool:
        signo = self.signals.peek()
        if signo == signal.SIGINT:
            self.signals.take()
            return True
        return signo == signal.SIGTERM

    def search(self, direction: int, new_query: bool) -> None:
        pane = self.focused_pane()
        if not pane.row_count:
            return
        if new_query:
            label = "Search (forward): " if direction > 0 else "Search (backward): "
            self.search_query = self.statusbar.prompt(
                label, self.decoder.read_byte, self._prompt_interrupted
            )
            self.mark_all_dirty()
        if self.search_query:
            pane.search(self.search_query, direction)

    def reload_all(self) -> None:
        """Reload every file-backed feed, keeping the numeric item position."""
        if not any(feed.reloadable for feed in self.store.feeds):
            return
        position = self.items_pane.pos
        self.store.reload()
        self._show_items(position)
        self.update_sidebar()
        self.update_title()

    def mark_read(self, start: int, end: int, read: bool) -> None:
        """Mark items ``start..end`` read (or unread) through the external tool.

        Nothing changes in memory unless the command succeeds.
        """
        if not self.store.url_file:
            logger.info("mark %s ignored: SFEED_URL_FILE is not set", "read" if read else "unread")
            return
        items = self.store.items_to_mark(start, end, read)
        if not items:
            return
        links = [self.store.link_of(item) for item in items]
        if not self.programs.mark(links, read):
            return
        self.store.set_read(items, read)
        self._show_items(self.items_pane.pos)
        self.update_sidebar()
        self.update_title()

    def activate(self) -> None:
        """Load the selected feed, or open the selected item's link."""
        if self.selected_pane == PANE_FEEDS:
            feed = self.selected_feed()
            if feed is not None:
                self.open_feed(feed)
            return
        item = self.selected_item()
        if item is not None:
            self.programs.plumb(self.store.link_of(item))

    def _focused_item(self) -> Item | None:
        if self.selected_pane != PANE_ITEMS:
            return None
        return self.selected_item()

    def open_enclosure(self) -> None:
        item = self._focused_item()
        if item is not None:
            self.programs.plumb(self.store.fields_of(item)[FIELD_ENCLOSURE])

    def pipe_item(self) -> None:
        item = self._focused_item()
        if item is None:
            return
        self.programs.pipe(self.store.line_of(item))
        self.mark_all_dirty()
        self.update_title()

    def yank_field(self, field: int) -> None:
        item = self._focused_item()
        if item is not None:
            self.programs.yank(self.store.fields_of(item)[field])

    def mark_current(self, read: bool) -> None:
        if self.selected_pane == PANE_ITEMS and self.items_pane.row_count:
            self.mark_read(self.items_pane.pos, self.items_pane.pos, read)

    def mark_all(self, read: bool) -> None:
        if self.items_pane.row_count:
            self.mark_read(0, self.items_pane.row_count - 1, read)

    def toggle_mouse(self) -> None:
        self.preferences.mouse = not self.preferences.mouse
        self.terminal.set_mouse_reporting(self.preferences.mouse)
        self._persist_preferences(self.preferences)

    def toggle_sidebar(self) -> None:
        hidden = not self.feeds_pane.hidden
        self.feeds_pane.hidden = hidden
        self.scrollbars[PANE_FEEDS].hidden = hidden
        if hidden and self.selected_pane == PANE_FEEDS:
            self.selected_pane = PANE_ITEMS
        self.update_geometry()

    def toggle_only_new(self) -> None:
        self.preferences.only_new = not self.preferences.only_new
        self.update_sidebar()
        self.update_geometry()
        self._persist_preferences(self.preferences)

    def _build_keymap(self) -> KeyMap:
        def focused(action: Callable[[Pane], None]) -> Callable[[], None]:
            return lambda: action(self.focused_pane())

        def quit_app() -> bool:
            return True

        return KeyMap().bind(
            KeyBinding(("k", "UP"), focused(lambda pane: pane.scroll_by(-1))),
            KeyBinding(("j", "DOWN"), focused(lambda pane: pane.scroll_by(1))),
            KeyBinding(("h", "LEFT"), lambda: self.cycle_pane(-1)),
            KeyBinding(("l", "RIGHT"), lambda: self.cycle_pane(1)),
            KeyBinding(("TAB",), self.cycle_tab),
            KeyBinding(("g", "HOME"), focused(Pane.go_first)),
            KeyBinding(("G", "END"), focused(Pane.go_last)),
            KeyBinding(("CTRL_B", "PAGE_UP"), focused(lambda pane: pane.scroll_pages(-1))),
            KeyBinding((" ", "CTRL_F", "PAGE_DOWN"), focused(lambda pane: pane.scroll_pages(1))),
            KeyBinding(("/",), lambda: self.search(1, True)),
            KeyBinding(("?",), lambda: self.search(-1, True)),
            KeyBinding(("n",), lambda: self.search(1, False)),
            KeyBinding(("N",), lambda: self.search(-1, False)),
            KeyBinding(("CTRL_L",), self.update_geometry),
            KeyBinding(("R",), self.reload_all),
            KeyBinding(("a", "e", "@"), self.open_enclosure),
            KeyBinding(("m",), self.toggle_mouse),
            KeyBinding(("s",), self.toggle_sidebar),
            KeyBinding(("t",), self.toggle_only_new),
            KeyBinding(("o", "ENTER"), self.activate),
            KeyBinding(("c", "p", "|"), self.pipe_item),
            KeyBinding(("y",), lambda: self.yank_field(FIELD_LINK)),
            KeyBinding(("E",), lambda: self.yank_field(FIELD_ENCLOSURE)),
            KeyBinding(("r",), lambda: self.mark_current(True)),
            KeyBinding(("u",), lambda: self.mark_current(False)),
            KeyBinding(("f",), lambda: self.mark_all(True)),
            KeyBinding(("F",), lambda: self.mark_all(False)),
            KeyBinding(("q", "CTRL_D"), quit_app),
        )

    # Events.

    def handle_mouse(self, report: MouseReport) -> None:
        if not self.mouse_enabled or report.release:
            logger.debug("ignoring mouse report %s", report)
            return
        for index, pane in enumerate(self.panes):
            if pane.hidden or pane.height <= 0 or self.layout is None:
                continue
            rect = self.layout.feeds if index == PANE_FEEDS else self.layout.items
            if not rect.contains(report.x, report.y):
                continue
            changed_pane = self.selected_pane != index
            self.selected_pane = index
            pos = report.y - pane.y + pane.page_start()
            if report.button == MOUSE_LEFT:
                if pos >= pane.row_count:
                    return
                if index == PANE_FEEDS:
                    pane.set_position(pos)
                    feed = self.selected_feed()
                    if feed is not None:
                        self.open_feed(feed)
                elif pane.pos == pos and not changed_pane:
                    self.activate()
                else:
                    pane.set_position(pos)
            elif report.button == MOUSE_RIGHT:
                if index == PANE_ITEMS and pos < pane.row_count:
                    pane.set_position(pos)
                    self.pipe_item()
            elif report.button in (MOUSE_WHEEL_UP, MOUSE_WHEEL_DOWN):
                pane.scroll_pages(-1 if report.button == MOUSE_WHEEL_UP else 1)
            elif report.button in (MOUSE_BACK, MOUSE_FORWARD):
                self.cycle_pane(-1 if report.button == MOUSE_BACK else 1)
            return

    def handle_event(self, event: str | MouseReport) -> bool:
        """Apply one decoded event; return ``True`` when the user quits."""
        if isinstance(event, MouseReport):
            self.handle_mouse(event)
            return False
        return bool(self.keymap.dispatch(event))

    def handle_signal(self, signo: int) -> int | None:
        """Act on a delivered signal; return an exit status to stop the loop."""
        if signo == signal.SIGWINCH:
            self.update_geometry()
        elif signo == signal.SIGHUP:
            logger.info("SIGHUP: reloading feeds")
            self.reload_all()
        elif signo in (signal.SIGINT, signal.SIGTERM):
            logger.info("exiting on signal %d", signo)
            return 128 + signo
        return None


def _current_terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines
