"""Tests for repeat-customer row banding."""
import unittest

from borrowerdesk.data_structures import EMPTY_STYLE
from borrowerdesk.services.borrower_filters import TAB_ALL, TAB_REPEAT, group_sort
from borrowerdesk.services.row_banding import (
    AMBER, BLUE, assign_run_colors, highlight_repeat_rows, style_rows, RowStyleCache)
from helpers import make_borrower


class TestRunColors(unittest.TestCase):

    def setUp(self):
        self.sorted_rows = group_sort([
            make_borrower(1, "C1"), make_borrower(2, "C1"),
            make_borrower(3, "C2"), make_borrower(4, "C1"),
        ])

    def test_sorted_example_order(self):
        self.assertEqual([b.borrower_id for b in self.sorted_rows], [1, 2, 4, 3])

    def test_single_page_runs(self):
        self.assertEqual(assign_run_colors(self.sorted_rows), [AMBER, AMBER, AMBER, BLUE])

    def test_page_boundary_restarts_scan(self):
        # Two pages of two rows: [1, 2] and [4, 3]
        page0 = self.sorted_rows[0:2]
        page1 = self.sorted_rows[2:4]
        self.assertEqual(assign_run_colors(page0), [AMBER, AMBER])
        self.assertEqual([b.borrower_id for b in page1], [4, 3])
        self.assertEqual(assign_run_colors(page1), [AMBER, BLUE])

    def test_non_repeat_rows_get_empty_style_and_keep_state(self):
        rows = [make_borrower(1, "C1"), make_borrower(2, "C5", repeat=False), make_borrower(3, "C1"),
                make_borrower(4, "C2")]
        self.assertEqual(assign_run_colors(rows), [AMBER, EMPTY_STYLE, AMBER, BLUE])

    def test_alternates_over_many_runs(self):
        rows = [make_borrower(i, f"C{i}") for i in range(1, 6)]
        self.assertEqual(assign_run_colors(rows), [AMBER, BLUE, AMBER, BLUE, AMBER])

    def test_empty_window(self):
        self.assertEqual(assign_run_colors([]), [])

    def test_scheme_colours(self):
        self.assertEqual((AMBER.background, AMBER.hover_background, AMBER.border_accent),
                         ("#FFF9E6", "#FFF3CC", "#FFB300"))
        self.assertEqual((BLUE.background, BLUE.hover_background, BLUE.border_accent),
                         ("#E8F4FF", "#D6ECFF", "#1E88E5"))


class TestAllTabHighlight(unittest.TestCase):

    def test_repeat_rows_get_amber_without_alternation(self):
        rows = [make_borrower(1, "C1"), make_borrower(2, "C2"), make_borrower(3, "C3", repeat=False)]
        self.assertEqual(highlight_repeat_rows(rows), [AMBER, AMBER, EMPTY_STYLE])
        self.assertEqual(style_rows(TAB_ALL, rows), [AMBER, AMBER, EMPTY_STYLE])

    def test_style_rows_dispatches_repeat_tab(self):
        rows = [make_borrower(1, "C1"), make_borrower(2, "C2")]
        self.assertEqual(style_rows(TAB_REPEAT, rows), [AMBER, BLUE])

    def test_unknown_tab(self):
        with self.assertRaises(ValueError):
            style_rows("other", [])


class TestRowStyleCache(unittest.TestCase):

    def test_same_tab_and_window_hits(self):
        cache = RowStyleCache()
        rows = [make_borrower(1, "C1"), make_borrower(2, "C2")]
        first = cache.get(TAB_REPEAT, rows)
        second = cache.get(TAB_REPEAT, list(rows))
        self.assertIs(first, second)
        self.assertEqual((cache.hits, cache.misses), (1, 1))

    def test_tab_change_recomputes(self):
        cache = RowStyleCache()
        rows = [make_borrower(1, "C1"), make_borrower(2, "C2")]
        self.assertEqual(cache.get(TAB_REPEAT, rows), (AMBER, BLUE))
        self.assertEqual(cache.get(TAB_ALL, rows), (AMBER, AMBER))
        self.assertEqual(cache.misses, 2)

    def test_window_change_recomputes(self):
        cache = RowStyleCache()
        cache.get(TAB_REPEAT, [make_borrower(1, "C1")])
        cache.get(TAB_REPEAT, [make_borrower(2, "C1")])
        self.assertEqual(cache.misses, 2)


if __name__ == "__main__":
    unittest.main()
