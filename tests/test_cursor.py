"""Tests for the cursor transition table and edge-triggered scrolling."""

from __future__ import annotations

import io
import unittest
from unittest import mock

from lazyhex.byte_source import ByteSource
from lazyhex.cursor import CursorController, CursorPosition
from lazyhex.errors import ByteSourceError
from lazyhex.layout import CANONICAL_PANE, HEX_PANE
from lazyhex.viewport import Direction, ViewportController


def _cursor(size: int, rows: int = 2, start: int = 0) -> CursorController:
    viewport = ViewportController(ByteSource(io.BytesIO(bytes(size))), rows)
    cursor = CursorController(viewport)
    cursor.seek(start)
    return cursor


class CursorStepTests(unittest.TestCase):
    def test_right_sixteen_wraps_to_next_row_without_scrolling(self) -> None:
        cursor = _cursor(64)
        self.assertEqual(cursor.move(Direction.RIGHT, 16), 16)
        self.assertEqual(cursor.position, CursorPosition(1, 0))
        self.assertEqual(cursor.viewport.window_offset, 0)

    def test_right_at_bottom_right_scrolls_once(self) -> None:
        cursor = _cursor(64)
        cursor.place(1, 15)
        self.assertEqual(cursor.move(Direction.RIGHT, 1), 1)
        self.assertEqual(cursor.position, CursorPosition(1, 0))
        self.assertEqual(cursor.viewport.window_offset, 16)
        self.assertEqual(cursor.resolve_offset(), 32)

    def test_left_at_top_left_of_file_is_noop(self) -> None:
        cursor = _cursor(64)
        self.assertEqual(cursor.move(Direction.LEFT, 1), 0)
        self.assertEqual(cursor.position, CursorPosition(0, 0))
        self.assertEqual(cursor.viewport.window_offset, 0)

    def test_left_at_top_left_scrolls_up_and_wraps_column(self) -> None:
        cursor = _cursor(64, start=16)
        self.assertEqual(cursor.move(Direction.LEFT, 1), 1)
        self.assertEqual(cursor.position, CursorPosition(0, 15))
        self.assertEqual(cursor.resolve_offset(), 15)

    def test_left_at_row_start_moves_to_previous_row_end(self) -> None:
        cursor = _cursor(64)
        cursor.place(1, 0)
        cursor.step(Direction.LEFT)
        self.assertEqual(cursor.position, CursorPosition(0, 15))

    def test_up_at_top_scrolls_and_keeps_row(self) -> None:
        cursor = _cursor(64, start=35)
        cursor.step(Direction.UP)
        self.assertEqual(cursor.position, CursorPosition(0, 3))
        self.assertEqual(cursor.viewport.window_offset, 16)

    def test_up_at_top_of_file_is_noop(self) -> None:
        cursor = _cursor(64, start=3)
        self.assertEqual(cursor.move(Direction.UP, 1), 0)
        self.assertEqual(cursor.position, CursorPosition(0, 3))

    def test_down_within_window_moves_row(self) -> None:
        cursor = _cursor(64)
        cursor.step(Direction.DOWN)
        self.assertEqual(cursor.position, CursorPosition(1, 0))
        self.assertEqual(cursor.viewport.window_offset, 0)

    def test_down_stops_at_first_rejected_scroll(self) -> None:
        cursor = _cursor(40)
        cursor.place(1, 0)
        self.assertEqual(cursor.move(Direction.DOWN, 5), 2)
        self.assertEqual(cursor.viewport.window_offset, 32)
        self.assertEqual(cursor.position, CursorPosition(1, 0))

    def test_multi_step_right_crosses_scroll_boundary(self) -> None:
        cursor = _cursor(40, start=16)
        cursor.place(1, 14)
        self.assertEqual(cursor.move(Direction.RIGHT, 3), 3)
        self.assertEqual(cursor.viewport.window_offset, 32)
        self.assertEqual(cursor.position, CursorPosition(1, 1))

    def test_resolve_offset_follows_window_and_grid(self) -> None:
        cursor = _cursor(256, start=0x45)
        self.assertEqual(cursor.resolve_offset(), 0x45)
        cursor.step(Direction.DOWN)
        self.assertEqual(cursor.resolve_offset(), 0x55)

    def test_read_failure_reports_steps_already_applied(self) -> None:
        cursor = _cursor(64)
        cursor.place(1, 14)
        with mock.patch.object(cursor.viewport.source, "read_at", side_effect=ByteSourceError("read failed")):
            with self.assertRaises(ByteSourceError) as ctx:
                cursor.move(Direction.RIGHT, 3)

        self.assertEqual(ctx.exception.applied, 1)
        self.assertEqual(cursor.position, CursorPosition(1, 15))
        self.assertEqual(cursor.viewport.window_offset, 0)


class CursorPaneTests(unittest.TestCase):
    def test_switch_pane_toggles_without_moving(self) -> None:
        cursor = _cursor(64, start=5)
        self.assertIs(cursor.active_pane, HEX_PANE)
        self.assertIs(cursor.switch_pane(), CANONICAL_PANE)
        self.assertIs(cursor.switch_pane(), HEX_PANE)
        self.assertEqual(cursor.position, CursorPosition(0, 5))

    def test_place_clamps_to_visible_grid(self) -> None:
        cursor = _cursor(64)
        cursor.place(9, 30)
        self.assertEqual(cursor.position, CursorPosition(1, 15))


if __name__ == "__main__":
    unittest.main()
