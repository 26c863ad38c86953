"""Display-width measurement and fixed-width cell formatting.

Rows are painted into fixed column budgets, so text is measured in terminal
cells rather than code points. Overlong text is cut with an ellipsis.
"""

from __future__ import annotations

import unicodedata

ELLIPSIS = "…"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Control characters are unprintable and report ``-1``, combining marks
    consume no columns, and East Asian wide/fullwidth characters consume two.
    """
    if unicodedata.category(ch) == "Cc":
        return -1
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies."""
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if w > 0:
            col += w
    return col


def pad_to_width(text: str, width: int, pad: str = " ") -> str:
    """Format ``text`` into exactly ``width`` cells.

    Short text is right-padded with ``pad``. Text that does not fit is cut and
    ends in an ellipsis; when a wide character straddles the boundary the
    remaining cell is padded so the result never overruns ``width``.
    Unprintable characters are dropped.
    """
    if width <= 0:
        return ""

    out: list[str] = []
    col = 0
    last_visible = max((i for i, ch in enumerate(text) if char_display_width(ch) > 0), default=-1)
    for i, ch in enumerate(text):
        w = char_display_width(ch)
        if w == -1:
            continue
        if col + w > width or (col + w == width and i < last_visible):
            out.append(ELLIPSIS)
            if col + w == width and w > 1:
                out.append(pad)
            return "".join(out)
        out.append(ch)
        col += w

    out.append(pad * (width - col))
    return "".join(out)
