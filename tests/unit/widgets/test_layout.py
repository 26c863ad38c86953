"""Tests for screen geometry."""

from __future__ import annotations

import unittest

from feedviewer.widgets.layout import Rect, compute_layout


class ComputeLayoutTests(unittest.TestCase):
    def test_sidebar_visible_geometry(self) -> None:
        layout = compute_layout(80, 24, True, 20)

        self.assertEqual(layout.feeds, Rect(0, 0, 20, 23))
        self.assertEqual(layout.feeds_scrollbar, Rect(20, 0, 1, 23))
        self.assertEqual(layout.items, Rect(21, 0, 58, 23))
        self.assertEqual(layout.items_scrollbar, Rect(79, 0, 1, 23))
        self.assertEqual(layout.statusbar, Rect(0, 23, 80, 1))
        self.assertTrue(layout.drawable)

    def test_hidden_sidebar_gives_items_full_width(self) -> None:
        layout = compute_layout(80, 24, False, 20)

        self.assertEqual(layout.items, Rect(0, 0, 79, 23))
        self.assertEqual(layout.items_scrollbar, Rect(79, 0, 1, 23))

    def test_resize_shrinks_pane_heights(self) -> None:
        before = compute_layout(80, 24, True, 10)
        after = compute_layout(40, 10, True, 10)

        self.assertEqual(before.items.height, 23)
        self.assertEqual(after.feeds.height, 9)
        self.assertEqual(after.items.height, 9)
        self.assertEqual(after.statusbar.y, 9)

    def test_too_small_terminal_is_not_drawable(self) -> None:
        self.assertFalse(compute_layout(80, 1, True, 10).drawable)
        self.assertFalse(compute_layout(12, 24, True, 10).drawable)
        self.assertTrue(compute_layout(12, 24, False, 10).drawable)

    def test_rect_contains(self) -> None:
        rect = Rect(2, 1, 3, 2)
        self.assertTrue(rect.contains(2, 1))
        self.assertTrue(rect.contains(4, 2))
        self.assertFalse(rect.contains(5, 1))
        self.assertFalse(rect.contains(2, 3))


if __name__ == "__main__":
    unittest.main()
