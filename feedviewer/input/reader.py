"""Low-level terminal input decoding.

Reads raw bytes from the terminal one at a time and turns them into key
tokens or mouse reports. Every read waits at most a bounded interval so the
main loop can observe signals even when the user is idle.

Key tokens are strings: single characters for plain bytes and upper-case
names (``"UP"``, ``"PAGE_DOWN"``, ``"CTRL_L"``, ...) for special keys. The
sentinels ``EOF``, ``TIMEOUT`` and ``INTERRUPTED`` are tokens too.
"""

from __future__ import annotations

import logging
import os
import select
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

READ_TIMEOUT_MS = 250
ESC_SEQUENCE_TIMEOUT_MS = 250

EOF = "EOF"
TIMEOUT = "TIMEOUT"
INTERRUPTED = "INTERRUPTED"

_CONTROL_KEYS: dict[int, str] = {
    0x02: "CTRL_B",
    0x04: "CTRL_D",
    0x06: "CTRL_F",
    0x08: "BACKSPACE",
    0x09: "TAB",
    0x0A: "ENTER",
    0x0C: "CTRL_L",
    0x0D: "ENTER",
    0x7F: "BACKSPACE",
}

# Final byte of ``ESC [`` / ``ESC O`` sequences that need no further input.
_FINAL_KEYS: dict[int, str] = {
    ord("A"): "UP",
    ord("B"): "DOWN",
    ord("C"): "RIGHT",
    ord("D"): "LEFT",
    ord("H"): "HOME",
    ord("F"): "END",
}

# ``ESC [ <digit> ~`` forms.
_TILDE_KEYS: dict[int, str] = {
    ord("1"): "HOME",
    ord("7"): "HOME",
    ord("4"): "END",
    ord("8"): "END",
    ord("5"): "PAGE_UP",
    ord("6"): "PAGE_DOWN",
}


@dataclass(frozen=True)
class MouseReport:
    """One decoded X10 mouse report with 0-based cell coordinates.

    ``button`` is 0-2 for the primary buttons, 3-6 for the wheel group
    (3 = wheel up, 4 = wheel down) and 7 and up for side buttons. It is
    ``None`` for a release, whose button identity X10 does not carry.
    """

    button: int | None
    x: int
    y: int

    @property
    def release(self) -> bool:
        return self.button is None


def decode_mouse_report(cb: int, cx: int, cy: int) -> MouseReport:
    """Decode the three payload bytes following ``ESC [ M``."""
    code = max(0, cb - 32)
    group = 0
    while code >= 64:
        code -= 64
        group += 1
    low = code & 3
    if group == 0:
        button = None if low == 3 else low
    else:
        button = low + 3 + (group - 1) * 4
    return MouseReport(button=button, x=cx - 33, y=cy - 33)


def read_byte(fd: int, timeout_ms: int) -> int | str:
    """Read one byte, waiting at most ``timeout_ms``.

    Returns the byte value, or one of the ``EOF``/``TIMEOUT``/``INTERRUPTED``
    sentinels. Read errors other than an interrupted call are reported as EOF.
    """
    try:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    except InterruptedError:
        return INTERRUPTED
    if not ready:
        return TIMEOUT
    try:
        data = os.read(fd, 1)
    except InterruptedError:
        return INTERRUPTED
    except OSError as exc:
        logger.warning("terminal read failed: %s", exc)
        return EOF
    if not data:
        return EOF
    return data[0]


class InputDecoder:
    """Byte-stream state machine producing key tokens and mouse reports.

    Unrecognized escape sequences are dropped along with the bytes read so
    far; nothing is pushed back for re-reading.
    """

    def __init__(
        self,
        fd: int,
        reader: Callable[[int, int], int | str] = read_byte,
        escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS,
    ) -> None:
        self.fd = fd
        self._reader = reader
        self._escape_timeout_ms = escape_timeout_ms

    def read_byte(self, timeout_ms: int = READ_TIMEOUT_MS) -> int | str:
        """Read one raw byte (or sentinel) from the bound descriptor."""
        return self._reader(self.fd, timeout_ms)

    def next_event(self, timeout_ms: int = READ_TIMEOUT_MS) -> str | MouseReport:
        """Return the next logical input event."""
        while True:
            ch = self.read_byte(timeout_ms)
            if isinstance(ch, str):
                return ch
            if ch != 0x1B:
                return _CONTROL_KEYS.get(ch, chr(ch))
            event = self._read_escape()
            if event is not None:
                return event

    def _read_sequence_byte(self) -> int | str:
        return self.read_byte(self._escape_timeout_ms)

    def _read_escape(self) -> str | MouseReport | None:
        """Decode the remainder of an escape sequence.

        Returns ``None`` when the sequence is abandoned. EOF and interrupts
        seen mid-sequence are returned so the caller can act on them.
        """
        introducer = self._read_sequence_byte()
        if isinstance(introducer, str):
            return _sentinel_or_none(introducer)
        if introducer not in (ord("["), ord("O")):
            logger.debug("dropping escape sequence introducer %#x", introducer)
            return None

        selector = self._read_sequence_byte()
        if isinstance(selector, str):
            return _sentinel_or_none(selector)
        if selector in _FINAL_KEYS:
            return _FINAL_KEYS[selector]
        if selector in _TILDE_KEYS:
            terminator = self._read_sequence_byte()
            if isinstance(terminator, str):
                return _sentinel_or_none(terminator)
            if terminator == ord("~"):
                return _TILDE_KEYS[selector]
            logger.debug("dropping unterminated key sequence %#x %#x", selector, terminator)
            return None
        if selector == ord("M") and introducer == ord("["):
            payload: list[int] = []
            for _ in range(3):
                part = self._read_sequence_byte()
                if isinstance(part, str):
                    return _sentinel_or_none(part)
                payload.append(part)
            return decode_mouse_report(*payload)
        logger.debug("dropping unknown escape sequence selector %#x", selector)
        return None


def _sentinel_or_none(token: str) -> str | None:
    """Propagate EOF/interrupts seen mid-sequence; a timeout abandons it."""
    if token == TIMEOUT:
        return None
    return token
