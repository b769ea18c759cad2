"""Tests for single-byte writes and manual hex entry parsing."""

from __future__ import annotations

import io
import os
import unittest
from functools import partial

from lazyhex import input as input_mod
from lazyhex.byte_source import ByteSource
from lazyhex.errors import InvalidHexDigitError, OutOfRangeError
from lazyhex.writer import ByteEditWriter, parse_hex_byte, read_hex_byte


def _keys(*keys: str):
    return iter(keys).__next__


class HexEntryTests(unittest.TestCase):
    def test_parse_hex_byte_accepts_both_cases(self) -> None:
        self.assertEqual(parse_hex_byte("ab"), 0xAB)
        self.assertEqual(parse_hex_byte("F0"), 0xF0)
        self.assertEqual(parse_hex_byte("07"), 0x07)

    def test_parse_hex_byte_reports_offending_character(self) -> None:
        with self.assertRaises(InvalidHexDigitError) as ctx:
            parse_hex_byte("az")
        self.assertEqual(ctx.exception.char, "z")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_read_hex_byte_ignores_non_character_keys(self) -> None:
        self.assertEqual(read_hex_byte(_keys("UP", "c", "TAB", "3")), 0xC3)

    def test_read_hex_byte_cancels_on_escape(self) -> None:
        self.assertIsNone(read_hex_byte(_keys("1", "ESC")))

    def test_read_hex_byte_rejects_invalid_digits(self) -> None:
        with self.assertRaises(InvalidHexDigitError):
            read_hex_byte(_keys("z", "z"))


class EndOfInputTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_read_hex_byte_cancels_when_input_is_exhausted(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"a")
            os.close(write_fd)
            value = read_hex_byte(partial(input_mod.read_key, read_fd))
        finally:
            os.close(read_fd)

        self.assertIsNone(value)


class ByteEditWriterTests(unittest.TestCase):
    def test_write_byte_preserves_handle_position(self) -> None:
        handle = io.BytesIO(bytes(32))
        handle.seek(9)
        ByteEditWriter(ByteSource(handle)).write_byte(0xAB, 20)
        self.assertEqual(handle.getvalue()[20], 0xAB)
        self.assertEqual(handle.tell(), 9)

    def test_write_past_end_is_rejected_without_growing_file(self) -> None:
        handle = io.BytesIO(bytes(32))
        writer = ByteEditWriter(ByteSource(handle))
        with self.assertRaises(OutOfRangeError):
            writer.write_byte(0x01, 32)
        self.assertEqual(len(handle.getvalue()), 32)

    def test_write_rejects_values_outside_byte_range(self) -> None:
        writer = ByteEditWriter(ByteSource(io.BytesIO(bytes(4))))
        with self.assertRaises(ValueError):
            writer.write_byte(256, 0)


if __name__ == "__main__":
    unittest.main()
