"""Status line and the blocking line-edited prompt drawn over it."""

from __future__ import annotations

import codecs
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..ansi import display_width, pad_to_width
from ..input.reader import EOF, INTERRUPTED, TIMEOUT
from ..terminal import ATTR_REVERSE

if TYPE_CHECKING:
    from ..terminal import TerminalController

ByteReader = Callable[[], "int | str"]


def edit_line(
    term: TerminalController,
    read_byte: ByteReader,
    interrupted: Callable[[], bool] = lambda: False,
) -> str | None:
    """Read one line of text, echoing it at the cursor.

    Printable input is appended, backspace erases the last character's
    display cells, and Enter finishes. EOF, or ``interrupted()`` returning
    true while waiting, yields ``None``.
    """
    decoder = codecs.getincrementaldecoder("utf-8")("replace")
    chars: list[str] = []
    while True:
        ch = read_byte()
        if ch in (TIMEOUT, INTERRUPTED):
            if interrupted():
                return None
            continue
        if ch == EOF or isinstance(ch, str):
            return None
        if ch in (0x0A, 0x0D):
            return "".join(chars)
        if ch in (0x08, 0x7F):
            decoder.reset()
            if not chars:
                continue
            removed = chars.pop()
            cells = max(1, display_width(removed))
            term.write("\b \b" * cells)
            term.flush()
            continue
        if ch < 0x20:
            continue
        text = decoder.decode(bytes([ch]))
        if text:
            chars.append(text)
            term.write(text)
            term.flush()


class StatusBar:
    """One reverse-video row at the bottom of the screen."""

    def __init__(self, term: TerminalController) -> None:
        self.term = term
        self.x = 0
        self.y = 0
        self.width = 0
        self.text = ""
        self.hidden = False
        self.dirty = True
        self.drawable = True

    def set_geometry(self, x: int, y: int, width: int) -> None:
        self.x, self.y, self.width = x, y, width
        self.dirty = True

    def update(self, text: str) -> None:
        if text == self.text:
            return
        self.text = text
        self.dirty = True

    def draw(self) -> None:
        if self.hidden or not self.dirty or not self.drawable:
            return
        self.term.move(self.y, self.x)
        self.term.set_attrs(ATTR_REVERSE)
        self.term.write(pad_to_width(self.text, self.width))
        self.term.reset_attrs()
        self.dirty = False

    def prompt(
        self,
        label: str,
        read_byte: ByteReader,
        interrupted: Callable[[], bool] = lambda: False,
    ) -> str | None:
        """Show ``label`` and read a line typed after it.

        The terminal stays in cbreak mode with echo off rather than switching
        to cooked mode; typed characters are echoed by the line editor itself.
        The status row is left dirty so the next frame repaints it.
        """
        with self.term.line_input():
            self.term.move(self.y, self.x)
            self.term.set_attrs(ATTR_REVERSE)
            self.term.write(label)
            self.term.reset_attrs()
            self.term.move(self.y, self.x + display_width(label))
            self.term.clear_to_eol()
            self.term.flush()
            result = edit_line(self.term, read_byte, interrupted)
        self.dirty = True
        return result
