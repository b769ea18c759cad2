"""Exception types raised by the viewport/cursor/buffer engine.

Range and hex-entry errors are recoverable: callers leave state unchanged and
report them. ``ByteSourceError`` wraps failures of the underlying file handle.
"""

from __future__ import annotations


class HexEditError(Exception):
    """Base class for all lazyhex engine errors."""


class OutOfRangeError(HexEditError, IndexError):
    """Seek, scroll, or write target falls outside ``[0, file_length]``."""


class InvalidHexDigitError(HexEditError, ValueError):
    """Manual byte entry contained a character that is not a hex digit."""

    def __init__(self, char: str) -> None:
        super().__init__(f"{char!r}: invalid hex digit")
        self.char = char


class ByteSourceError(HexEditError, OSError):
    """Reading, writing, or seeking the underlying file failed.

    ``applied`` counts the cursor steps a multi-step move completed before
    the failure.
    """

    applied = 0
