"""Tests for pane scrolling, dirty tracking, painting, and search."""

from __future__ import annotations

import unittest

from feedviewer.widgets.pane import Pane, Row


class RecordingTerminal:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def move(self, row: int, col: int) -> None:
        self.calls.append(("move", row, col))

    def set_attrs(self, *attrs: str) -> None:
        if attrs:
            self.calls.append(("attrs", attrs))

    def reset_attrs(self) -> None:
        self.calls.append(("reset",))

    def write(self, text: str) -> None:
        self.calls.append(("write", text))

    def written(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "write"]


def _pane(count: int, height: int = 5, width: int = 10) -> tuple[Pane, RecordingTerminal]:
    term = RecordingTerminal()
    pane = Pane("test", term)
    pane.set_geometry(0, 0, width, height)
    pane.set_rows([Row(text=f"row {i}") for i in range(count)])
    pane.focused = True
    return pane, term


class PositionTests(unittest.TestCase):
    def test_set_position_clamps_to_range(self) -> None:
        pane, _term = _pane(8)
        pane.set_position(-3)
        self.assertEqual(pane.pos, 0)
        pane.set_position(100)
        self.assertEqual(pane.pos, 7)

    def test_set_position_without_rows_is_noop(self) -> None:
        pane, _term = _pane(0)
        pane.dirty = False
        pane.set_position(4)
        self.assertEqual(pane.pos, 0)
        self.assertFalse(pane.dirty)

    def test_setting_current_position_keeps_dirty_flag(self) -> None:
        pane, term = _pane(8)
        pane.draw()
        term.calls.clear()
        pane.set_position(0)
        self.assertFalse(pane.dirty)
        self.assertEqual(term.calls, [])

    def test_move_within_page_repaints_two_rows(self) -> None:
        pane, term = _pane(8)
        pane.draw()
        term.calls.clear()

        pane.set_position(2)

        self.assertFalse(pane.dirty)
        moves = [call for call in term.calls if call[0] == "move"]
        self.assertEqual(moves, [("move", 0, 0), ("move", 2, 0)])
        self.assertIn(("attrs", ("7",)), term.calls)

    def test_move_to_other_page_marks_dirty(self) -> None:
        pane, term = _pane(12)
        pane.draw()
        term.calls.clear()

        pane.set_position(6)

        self.assertTrue(pane.dirty)
        self.assertEqual(term.calls, [])
        self.assertEqual(pane.page_start(), 5)

    def test_scroll_pages(self) -> None:
        pane, _term = _pane(12)
        pane.set_position(1)
        pane.scroll_pages(1)
        self.assertEqual(pane.pos, 5)
        pane.scroll_pages(1)
        self.assertEqual(pane.pos, 10)
        pane.scroll_pages(-1)
        self.assertEqual(pane.pos, 9)
        pane.scroll_pages(-1)
        self.assertEqual(pane.pos, 4)

    def test_first_and_last(self) -> None:
        pane, _term = _pane(12)
        pane.go_last()
        self.assertEqual(pane.pos, 11)
        pane.go_first()
        self.assertEqual(pane.pos, 0)

    def test_set_rows_clamps_existing_position(self) -> None:
        pane, _term = _pane(12)
        pane.set_position(10)
        pane.set_rows([Row(text="only")])
        self.assertEqual(pane.pos, 0)
        self.assertTrue(pane.dirty)


class DrawTests(unittest.TestCase):
    def test_draw_paints_full_page_and_clears_dirty(self) -> None:
        pane, term = _pane(3, height=4, width=6)
        pane.rows[1].bold = True
        pane.draw()

        self.assertFalse(pane.dirty)
        self.assertEqual(term.written(), ["row 0 ", "row 1 ", "row 2 ", "      "])
        self.assertIn(("attrs", ("1",)), term.calls)

    def test_unfocused_selection_is_dimmed(self) -> None:
        pane, term = _pane(2)
        pane.focused = False
        pane.draw()
        self.assertIn(("attrs", ("2", "7")), term.calls)

    def test_hidden_pane_is_not_painted(self) -> None:
        pane, term = _pane(2)
        pane.hidden = True
        pane.draw()
        self.assertEqual(term.calls, [])
        self.assertTrue(pane.dirty)


class SearchTests(unittest.TestCase):
    def test_forward_and_backward_search(self) -> None:
        pane, _term = _pane(6)
        pane.rows[4].text = "Needle here"
        pane.rows[1].text = "another NEEDLE"

        self.assertTrue(pane.search("needle", 1))
        self.assertEqual(pane.pos, 1)
        self.assertTrue(pane.search("needle", 1))
        self.assertEqual(pane.pos, 4)
        self.assertTrue(pane.search("needle", -1))
        self.assertEqual(pane.pos, 1)

    def test_search_does_not_wrap(self) -> None:
        pane, _term = _pane(6)
        pane.rows[0].text = "needle"
        pane.set_position(5)

        self.assertFalse(pane.search("needle", 1))
        self.assertEqual(pane.pos, 5)

    def test_search_on_empty_pane(self) -> None:
        pane, _term = _pane(0)
        self.assertFalse(pane.search("x", 1))
        self.assertEqual(pane.pos, 0)

    def test_custom_matcher(self) -> None:
        term = RecordingTerminal()
        pane = Pane("test", term, match_row=lambda row, query: row.text == query)
        pane.set_rows([Row(text="a"), Row(text="ab"), Row(text="b")])
        self.assertTrue(pane.search("b", 1))
        self.assertEqual(pane.pos, 2)


if __name__ == "__main__":
    unittest.main()
