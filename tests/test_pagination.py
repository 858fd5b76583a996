import unittest

from borrowerdesk.services.pagination import page_window, page_count, clamp_page


class TestPagination(unittest.TestCase):

    def test_window_slices_sequence(self):
        seq = list(range(23))
        self.assertEqual(page_window(seq, 0, 10), list(range(10)))
        self.assertEqual(page_window(seq, 2, 10), [20, 21, 22])

    def test_pages_reconstruct_sequence(self):
        seq = [f"row{i}" for i in range(37)]
        for size in (5, 10, 25, 50):
            pages = [page_window(seq, p, size) for p in range(page_count(len(seq), size))]
            rebuilt = [row for page in pages for row in page]
            self.assertEqual(rebuilt, seq)
            self.assertEqual(sum(len(p) for p in pages), len(seq))

    def test_page_past_end_is_empty(self):
        self.assertEqual(page_window([1, 2, 3], 4, 5), [])

    def test_invalid_page_size(self):
        with self.assertRaises(ValueError):
            page_window([1, 2], 0, 7)

    def test_negative_page(self):
        with self.assertRaises(ValueError):
            page_window([1, 2], -1, 5)

    def test_page_count(self):
        self.assertEqual(page_count(0, 10), 0)
        self.assertEqual(page_count(10, 10), 1)
        self.assertEqual(page_count(11, 10), 2)

    def test_clamp_page(self):
        self.assertEqual(clamp_page(5, 12, 5), 2)
        self.assertEqual(clamp_page(1, 12, 5), 1)
        self.assertEqual(clamp_page(3, 0, 5), 0)


if __name__ == "__main__":
    unittest.main()
