"""Screen widgets: geometry, list panes, scrollbars, and the status bar."""

from .layout import Rect, ScreenLayout, compute_layout
from .pane import FeedRef, ItemRef, Pane, Row
from .scrollbar import Scrollbar
from .statusbar import StatusBar, edit_line

__all__ = [
    "FeedRef",
    "ItemRef",
    "Pane",
    "Rect",
    "Row",
    "ScreenLayout",
    "Scrollbar",
    "StatusBar",
    "compute_layout",
    "edit_line",
]
