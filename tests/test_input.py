"""Regression tests for raw-key decoding.

Covers ESC timing, cursor and paging sequences, and control-key tokens.
"""

import os
import time
import unittest

from lazyhex import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_keys(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_keys(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(
            self._read_keys(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_paging_and_home_end_sequences(self) -> None:
        self.assertEqual(
            self._read_keys(b"\x1b[5~\x1b[6~\x1b[H\x1bOF\x1b[1~", 5),
            ["PAGE_UP", "PAGE_DOWN", "HOME", "END", "HOME"],
        )

    def test_modified_arrow_is_not_bound(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[1;5C"), ["ESC"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_keys(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys_map_to_tokens(self) -> None:
        self.assertEqual(
            self._read_keys(b"\t\r\x7f\x03", 4),
            ["TAB", "ENTER", "BACKSPACE", "CTRL_C"],
        )

    def test_utf8_character_is_read_whole(self) -> None:
        self.assertEqual(self._read_keys("é".encode("utf-8")), ["é"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_keys(b""), [""])


if __name__ == "__main__":
    unittest.main()
