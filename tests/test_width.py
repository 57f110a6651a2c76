from __future__ import annotations

import unittest

from hlcat import width as width_mod


class CharWidthTests(unittest.TestCase):
    def test_tab_expands_to_next_stop(self) -> None:
        self.assertEqual(width_mod.char_width("\t", 0, 8), 8)
        self.assertEqual(width_mod.char_width("\t", 3, 8), 5)
        self.assertEqual(width_mod.char_width("\t", 5, 4), 3)

    def test_non_positive_tab_width_falls_back_to_eight(self) -> None:
        self.assertEqual(width_mod.char_width("\t", 2, 0), 6)
        self.assertEqual(width_mod.char_width("\t", 2, -3), 6)

    def test_control_codes_take_no_columns(self) -> None:
        for ch in ("\x00", "\x07", "\r", "\x1f", "\x7f"):
            self.assertEqual(width_mod.char_width(ch, 0), 0, repr(ch))

    def test_wide_characters_take_two_columns(self) -> None:
        for ch in ("ᄀ", "〈", "〉", "一", "好", "가", "！", "\U0001f600", "\U00020000"):
            self.assertEqual(width_mod.char_width(ch, 0), 2, repr(ch))

    def test_range_edges_are_inclusive(self) -> None:
        for ch in ("\u115f", "\ua4cf", "\uff60", "\U0001f64f", "\U0003fffd"):
            self.assertEqual(width_mod.char_width(ch, 0), 2, repr(ch))

    def test_neighbours_of_wide_ranges_and_carve_out_are_narrow(self) -> None:
        for ch in ("a", "\u303f", "\u2e7f", "\ua4d0", "\uff61", "\U0001f650", "\U0003fffe"):
            self.assertEqual(width_mod.char_width(ch, 0), 1, repr(ch))

    def test_wide_table_is_sorted_and_disjoint(self) -> None:
        previous_end = -1
        for start, end in width_mod.WIDE_RANGES:
            self.assertLessEqual(start, end)
            self.assertGreater(start, previous_end)
            previous_end = end


class TextWidthTests(unittest.TestCase):
    def test_escapes_do_not_count(self) -> None:
        self.assertEqual(width_mod.text_width("\x1b[31mab好\x1b[0m"), 4)

    def test_tabs_follow_running_column(self) -> None:
        self.assertEqual(width_mod.text_width("ab\tc", tab_width=4), 5)


if __name__ == "__main__":
    unittest.main()
