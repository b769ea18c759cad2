"""Tests for terminal mode control sequences and raw-mode lifecycle."""

from __future__ import annotations

import os
import termios
import unittest
from unittest import mock

from lazyhex.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazyhex.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazyhex.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazyhex.terminal.os.write") as write_mock, mock.patch(
            "lazyhex.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[H\x1b[2J\x1b[?25h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[0m\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazyhex.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_size_reports_lines_then_columns(self) -> None:
        with mock.patch(
            "lazyhex.terminal.shutil.get_terminal_size",
            return_value=os.terminal_size((100, 30)),
        ):
            self.assertEqual(TerminalController.size(), (30, 100))


if __name__ == "__main__":
    unittest.main()
