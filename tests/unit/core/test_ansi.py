"""Tests for cell-width measurement and ellipsis truncation."""

from __future__ import annotations

import unittest

from feedviewer.ansi import ELLIPSIS, char_display_width, display_width, pad_to_width


class DisplayWidthTests(unittest.TestCase):
    def test_character_classes(self) -> None:
        self.assertEqual(char_display_width("a"), 1)
        self.assertEqual(char_display_width("中"), 2)
        self.assertEqual(char_display_width("\u0301"), 0)
        self.assertEqual(char_display_width("\x07"), -1)

    def test_display_width_ignores_unprintable(self) -> None:
        self.assertEqual(display_width("ab\x01中"), 4)


class PadToWidthTests(unittest.TestCase):
    def test_short_text_is_padded(self) -> None:
        self.assertEqual(pad_to_width("abc", 6), "abc   ")

    def test_exact_fit_is_unchanged(self) -> None:
        self.assertEqual(pad_to_width("abcd", 4), "abcd")

    def test_long_text_ends_in_ellipsis(self) -> None:
        result = pad_to_width("abcdefgh", 5)
        self.assertEqual(result, "abcd" + ELLIPSIS)
        self.assertEqual(display_width(result), 5)

    def test_wide_character_straddling_boundary_is_padded(self) -> None:
        result = pad_to_width("a中b", 3)
        self.assertEqual(result, "a" + ELLIPSIS + " ")
        self.assertEqual(display_width(result), 3)

    def test_non_positive_width_is_empty(self) -> None:
        self.assertEqual(pad_to_width("abc", 0), "")
        self.assertEqual(pad_to_width("abc", -2), "")

    def test_control_characters_are_dropped(self) -> None:
        self.assertEqual(pad_to_width("a\tb", 3), "ab ")

    def test_exact_fit_keeps_trailing_marks_and_drops_trailing_controls(self) -> None:
        self.assertEqual(pad_to_width("e\u0301", 1), "e\u0301")
        self.assertEqual(pad_to_width("ab\x07", 2), "ab")
        self.assertEqual(pad_to_width("abc\u0301d", 3), "ab" + ELLIPSIS)


if __name__ == "__main__":
    unittest.main()
