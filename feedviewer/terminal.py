"""Terminal control for the TUI session.

Owns the tty mode lifecycle, alternate-screen switching, mouse reporting,
and the window title. Drawing primitives (cursor moves, text attributes,
clears) are buffered and written out in one ``os.write`` per ``flush``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# xterm X10-compatible mouse reporting (button press/release, 3-byte coordinates).
MOUSE_ON = b"\x1b[?1000h"
MOUSE_OFF = b"\x1b[?1000l"

ATTR_RESET = "0"
ATTR_BOLD = "1"
ATTR_DIM = "2"
ATTR_REVERSE = "7"


class TerminalController:
    """Manage terminal mode transitions and buffered screen output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._mouse_reporting_enabled = False
        self._tui_active = False
        self._pending: list[str] = []

    def enable_tui_mode(self, mouse: bool = True) -> None:
        """Enter cbreak alternate-screen mode with the cursor hidden.

        Cbreak (no echo, no line buffering) keeps ``ISIG`` so interrupt and
        terminate keys still arrive as signals.
        """
        tty.setcbreak(self.stdin_fd, termios.TCSANOW)
        # Push window title, enter alternate screen, and hide cursor.
        os.write(self.stdout_fd, b"\x1b[22;2t\x1b[?1049h\x1b[?25l")
        self._tui_active = True
        self.set_mouse_reporting(mouse)

    def disable_tui_mode(self) -> None:
        """Restore the saved terminal state and the main screen buffer."""
        self.flush()
        # Disable mouse reporting, reset attributes, show cursor, leave
        # alternate screen, and pop the window title.
        os.write(self.stdout_fd, MOUSE_OFF + b"\x1b[0m\x1b[?25h\x1b[?1049l\x1b[23;2t")
        self._mouse_reporting_enabled = False
        self._tui_active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSANOW, self._saved_tty_state)

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    @property
    def mouse_reporting_enabled(self) -> bool:
        return self._mouse_reporting_enabled

    def set_mouse_reporting(self, enabled: bool) -> None:
        """Toggle terminal mouse tracking without changing other TUI state."""
        desired = bool(enabled)
        if desired == self._mouse_reporting_enabled:
            return
        self.flush()
        os.write(self.stdout_fd, MOUSE_ON if desired else MOUSE_OFF)
        self._mouse_reporting_enabled = desired

    @contextlib.contextmanager
    def tui_mode(self, mouse: bool = True):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode(mouse=mouse)
            yield self
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Temporarily hand the terminal back for an interactive child program."""
        mouse = self._mouse_reporting_enabled
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode(mouse=mouse)

    @contextlib.contextmanager
    def line_input(self):
        """Show the cursor for an in-place line editor and hide it afterwards.

        Echo stays off; the line editor paints its own characters so backspace
        can erase whole display cells.
        """
        self.save_cursor()
        self.show_cursor()
        self.flush()
        try:
            yield
        finally:
            self.hide_cursor()
            self.restore_cursor()
            self.flush()

    # Buffered drawing primitives.

    def write(self, text: str) -> None:
        self._pending.append(text)

    def move(self, row: int, col: int) -> None:
        """Move the cursor to 0-based ``(row, col)``."""
        self._pending.append(f"\x1b[{row + 1};{col + 1}H")

    def set_attrs(self, *attrs: str) -> None:
        if attrs:
            self._pending.append(f"\x1b[{';'.join(attrs)}m")

    def reset_attrs(self) -> None:
        self._pending.append("\x1b[0m")

    def clear_screen(self) -> None:
        self._pending.append("\x1b[H\x1b[2J")

    def clear_to_eol(self) -> None:
        self._pending.append("\x1b[K")

    def show_cursor(self) -> None:
        self._pending.append("\x1b[?25h")

    def hide_cursor(self) -> None:
        self._pending.append("\x1b[?25l")

    def save_cursor(self) -> None:
        self._pending.append("\x1b7")

    def restore_cursor(self) -> None:
        self._pending.append("\x1b8")

    def set_title(self, title: str) -> None:
        self._pending.append(f"\x1b]2;{title}\x1b\\")

    def flush(self) -> None:
        """Write all pending output in one call."""
        if not self._pending:
            return
        data = "".join(self._pending).encode("utf-8", errors="replace")
        self._pending.clear()
        os.write(self.stdout_fd, data)
