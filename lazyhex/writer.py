"""In-place single-byte writes and manual hex entry."""

from __future__ import annotations

import logging
import string
from collections.abc import Callable

from .byte_source import ByteSource
from .errors import InvalidHexDigitError, OutOfRangeError

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset(string.hexdigits)
CANCEL_KEYS = frozenset({"ESC", "CTRL_C"})


def parse_hex_byte(chars: str) -> int:
    """Convert exactly two hex characters into a byte value."""
    if len(chars) != 2:
        raise ValueError(f"expected 2 hex digits, got {len(chars)}")
    for char in chars:
        if char not in HEX_DIGITS:
            raise InvalidHexDigitError(char)
    return int(chars, 16)


def read_hex_byte(read_key: Callable[[], str]) -> int | None:
    """Collect two character keys and parse them; ``None`` means cancelled.

    An empty token (end of input) cancels like ESC. Other non-character
    tokens are ignored.
    """
    chars: list[str] = []
    while len(chars) < 2:
        key = read_key()
        if not key or key in CANCEL_KEYS:
            return None
        if len(key) == 1:
            chars.append(key)
    return parse_hex_byte("".join(chars))


class ByteEditWriter:
    """Writes single bytes through a borrowed ``ByteSource``."""

    def __init__(self, source: ByteSource) -> None:
        self.source = source

    def write_byte(self, value: int, offset: int) -> None:
        """Overwrite the byte at ``offset``; the handle position is unchanged.

        Writing past the last byte would grow the file, so it is rejected.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        length = self.source.length()
        if offset < 0 or offset >= length:
            raise OutOfRangeError(f"offset {offset:#x} is outside the {length}-byte file")
        self.source.write_at(offset, bytes((value,)))
        logger.info("wrote %#04x at offset %#x", value, offset)
