"""Tests for the scrollbar thumb, the status line, and the prompt editor."""

from __future__ import annotations

import contextlib
import unittest

from feedviewer.input.reader import EOF, TIMEOUT
from feedviewer.widgets.scrollbar import TRACK_SYMBOL, Scrollbar
from feedviewer.widgets.statusbar import StatusBar, edit_line


class RecordingTerminal:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.line_input_active = False

    def move(self, row: int, col: int) -> None:
        self.calls.append(("move", row, col))

    def set_attrs(self, *attrs: str) -> None:
        self.calls.append(("attrs", attrs))

    def reset_attrs(self) -> None:
        self.calls.append(("reset",))

    def write(self, text: str) -> None:
        self.calls.append(("write", text))

    def clear_to_eol(self) -> None:
        self.calls.append(("clear_to_eol",))

    def flush(self) -> None:
        self.calls.append(("flush",))

    @contextlib.contextmanager
    def line_input(self):
        self.line_input_active = True
        try:
            yield
        finally:
            self.line_input_active = False

    def written(self) -> str:
        return "".join(call[1] for call in self.calls if call[0] == "write")


def _byte_reader(data: bytes, tail: list | None = None):
    queue: list = list(data) + (tail if tail is not None else [EOF])

    def read() -> int | str:
        return queue.pop(0) if queue else EOF

    return read


class ScrollbarTests(unittest.TestCase):
    def test_thumb_fits_track_for_all_sizes(self) -> None:
        for height in range(1, 12):
            for rows in range(height + 1, 60):
                for position in range(0, rows, height):
                    bar = Scrollbar(RecordingTerminal())
                    bar.set_geometry(0, 0, height)
                    bar.update(position, rows, height)
                    with self.subTest(height=height, rows=rows, position=position):
                        self.assertGreaterEqual(bar.tick_size, 1)
                        self.assertGreaterEqual(bar.tick_pos, 0)
                        self.assertLessEqual(bar.tick_pos + bar.tick_size, height)

    def test_no_thumb_when_rows_fit(self) -> None:
        bar = Scrollbar(RecordingTerminal())
        bar.set_geometry(0, 0, 10)
        bar.update(0, 10, 10)
        self.assertEqual((bar.tick_pos, bar.tick_size), (0, 0))

    def test_last_page_pins_thumb_to_bottom(self) -> None:
        bar = Scrollbar(RecordingTerminal())
        bar.set_geometry(0, 0, 10)
        bar.update(90, 100, 10)
        self.assertEqual((bar.tick_pos, bar.tick_size), (9, 1))

    def test_unchanged_thumb_stays_clean(self) -> None:
        term = RecordingTerminal()
        bar = Scrollbar(term)
        bar.set_geometry(5, 0, 4)
        bar.update(0, 8, 4)
        bar.draw()
        self.assertFalse(bar.dirty)
        bar.update(0, 8, 4)
        self.assertFalse(bar.dirty)
        bar.update(4, 8, 4)
        self.assertTrue(bar.dirty)

    def test_draw_paints_track_and_thumb(self) -> None:
        term = RecordingTerminal()
        bar = Scrollbar(term)
        bar.set_geometry(3, 0, 4)
        bar.set_focus(True)
        bar.update(0, 8, 4)
        bar.draw()
        self.assertEqual(term.written(), "  " + TRACK_SYMBOL * 2)
        self.assertIn(("move", 3, 3), term.calls)


class StatusBarTests(unittest.TestCase):
    def test_draw_pads_text_in_reverse_video(self) -> None:
        term = RecordingTerminal()
        bar = StatusBar(term)
        bar.set_geometry(0, 9, 8)
        bar.update("http://x")
        bar.draw()
        bar.draw()

        self.assertEqual(term.written(), "http://x")
        self.assertIn(("attrs", ("7",)), term.calls)
        self.assertFalse(bar.dirty)

    def test_update_with_same_text_keeps_clean(self) -> None:
        bar = StatusBar(RecordingTerminal())
        bar.set_geometry(0, 0, 8)
        bar.update("a")
        bar.draw()
        bar.update("a")
        self.assertFalse(bar.dirty)


class EditLineTests(unittest.TestCase):
    def test_enter_returns_typed_text_with_backspace(self) -> None:
        term = RecordingTerminal()
        data = b"ab" + "中".encode("utf-8") + b"\x7f\x01c\r"
        self.assertEqual(edit_line(term, _byte_reader(data)), "abc")
        self.assertIn(("write", "\b \b\b \b"), term.calls)

    def test_eof_returns_none(self) -> None:
        self.assertIsNone(edit_line(RecordingTerminal(), _byte_reader(b"abc")))

    def test_interrupt_while_waiting_cancels(self) -> None:
        reader = _byte_reader(b"ab", [TIMEOUT, ord("c"), 0x0D])
        self.assertIsNone(edit_line(RecordingTerminal(), reader, interrupted=lambda: True))

    def test_timeout_without_interrupt_keeps_editing(self) -> None:
        reader = _byte_reader(b"ab", [TIMEOUT, ord("c"), 0x0D])
        self.assertEqual(edit_line(RecordingTerminal(), reader), "abc")

    def test_prompt_shows_label_and_marks_dirty(self) -> None:
        term = RecordingTerminal()
        bar = StatusBar(term)
        bar.set_geometry(0, 9, 40)
        bar.draw()

        result = bar.prompt("Search (forward): ", _byte_reader(b"rust\n"))

        self.assertEqual(result, "rust")
        self.assertTrue(bar.dirty)
        self.assertFalse(term.line_input_active)
        self.assertIn(("write", "Search (forward): "), term.calls)
        self.assertIn(("move", 9, len("Search (forward): ")), term.calls)

    def test_prompt_echoes_typed_characters_itself(self) -> None:
        term = RecordingTerminal()
        bar = StatusBar(term)
        bar.set_geometry(0, 9, 40)

        bar.prompt("Pipe to: ", _byte_reader(b"rust\r"))

        writes = [call[1] for call in term.calls if call[0] == "write"]
        self.assertEqual(writes[-4:], ["r", "u", "s", "t"])


if __name__ == "__main__":
    unittest.main()
