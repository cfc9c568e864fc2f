"""Tests for pane and editor geometry."""

from __future__ import annotations

import unittest

from zeno.layout import (
    EDITOR_CHROME_ROWS,
    MIN_CODE_HEIGHT,
    compute_editor_geometry,
    compute_layout,
    compute_list_width,
)


class ListWidthTests(unittest.TestCase):
    def test_default_fraction_is_forty_percent(self) -> None:
        self.assertEqual(compute_list_width(100), 40)

    def test_narrow_terminal_falls_back_to_half(self) -> None:
        # 40% of 40 is 16, under the 20-column floor.
        self.assertEqual(compute_list_width(40), 20)

    def test_custom_fraction(self) -> None:
        self.assertEqual(compute_list_width(100, 0.3), 30)

    def test_unknown_width(self) -> None:
        self.assertEqual(compute_list_width(0), 0)


class LayoutTests(unittest.TestCase):
    def test_detail_pane_gets_remainder_minus_gutter(self) -> None:
        layout = compute_layout(120, 40)
        self.assertEqual(layout.list_width, 48)
        self.assertEqual(layout.detail_width, 120 - 48 - 1)
        self.assertEqual(layout.list_rows, 36)
        self.assertTrue(layout.known)

    def test_zero_size_is_unknown(self) -> None:
        self.assertFalse(compute_layout(0, 0).known)


class EditorGeometryTests(unittest.TestCase):
    def test_code_gets_remaining_rows(self) -> None:
        geometry = compute_editor_geometry(100, 50)
        self.assertEqual(geometry.inner_width, 96)
        self.assertEqual(geometry.title_height, 1)
        self.assertEqual(geometry.description_height, 3)
        self.assertEqual(geometry.keywords_height, 3)
        self.assertEqual(geometry.code_height, 50 - 7 - EDITOR_CHROME_ROWS)

    def test_short_terminal_shrinks_code_then_keywords(self) -> None:
        geometry = compute_editor_geometry(80, 20)
        self.assertEqual(geometry.title_height, 1)
        self.assertEqual(geometry.description_height, 3)
        self.assertEqual(geometry.keywords_height, 1)
        self.assertEqual(geometry.code_height, 1)

    def test_very_short_terminal_gives_every_section_one_row(self) -> None:
        geometry = compute_editor_geometry(100, 10)
        heights = (
            geometry.title_height,
            geometry.description_height,
            geometry.keywords_height,
            geometry.code_height,
        )
        self.assertEqual(heights, (1, 1, 1, 1))

    def test_code_keeps_its_minimum_once_others_fit(self) -> None:
        self.assertEqual(compute_editor_geometry(80, 24).code_height, MIN_CODE_HEIGHT)

    def test_narrow_editor_matches_box_interior(self) -> None:
        self.assertEqual(compute_editor_geometry(22, 40).inner_width, 18)
        self.assertEqual(compute_editor_geometry(5, 40).inner_width, 1)
        self.assertEqual(compute_editor_geometry(4, 40).inner_width, 4)

    def test_rows_add_up_to_height_when_tall_enough(self) -> None:
        geometry = compute_editor_geometry(80, 40)
        used = (
            geometry.title_height
            + geometry.description_height
            + geometry.keywords_height
            + geometry.code_height
            + EDITOR_CHROME_ROWS
        )
        self.assertEqual(used, 40)


if __name__ == "__main__":
    unittest.main()
