"""Tests for the interactive loop without a real terminal."""

from __future__ import annotations

import contextlib
import unittest
from unittest import mock

from lazyhex.editor import HexEditor
from lazyhex.layout import ViewGeometry
from lazyhex.loop import POLL_TIMEOUT_MS, run_main_loop
from lazyhex.terminal import TerminalController
from lazyhex.viewport import Direction


class MainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self.editor = mock.Mock(spec=HexEditor)
        self.editor.geometry = ViewGeometry(80, 24)
        self.editor.show_help = False
        self.terminal = mock.Mock(spec=TerminalController)
        self.terminal.raw_mode.return_value = contextlib.nullcontext()

    def test_keys_are_dispatched_until_quit(self) -> None:
        with mock.patch("lazyhex.loop.read_key", side_effect=["", "3", "j", "q"]) as read_mock:
            run_main_loop(self.editor, self.terminal, 0, get_size=lambda: (24, 80))

        self.editor.move_cursor.assert_called_once_with(Direction.DOWN, 3)
        self.assertEqual(read_mock.call_count, 4)
        read_mock.assert_called_with(0, timeout_ms=POLL_TIMEOUT_MS)
        self.terminal.raw_mode.assert_called_once_with()

    def test_size_change_triggers_resize(self) -> None:
        sizes = iter([(24, 80), (24, 80), (10, 40)])
        with mock.patch("lazyhex.loop.read_key", side_effect=["", "q"]):
            run_main_loop(self.editor, self.terminal, 0, get_size=lambda: next(sizes))

        self.assertEqual(
            self.editor.resize.call_args_list,
            [mock.call(24, 80), mock.call(10, 40)],
        )

    def test_expired_status_is_polled_each_tick(self) -> None:
        with mock.patch("lazyhex.loop.read_key", side_effect=["", "", "q"]):
            run_main_loop(self.editor, self.terminal, 0, get_size=lambda: (24, 80))

        self.assertEqual(self.editor.clear_expired_status.call_count, 3)


if __name__ == "__main__":
    unittest.main()
