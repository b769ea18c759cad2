"""Viewport controller: seek, scroll, and refill over a ``ByteSource``.

``window_offset`` is the only authority for where the view starts. The file
handle's own position is never used to track the view.
"""

from __future__ import annotations

import enum
import logging

from .byte_source import ByteSource
from .errors import OutOfRangeError
from .window_buffer import ROW_BYTES, WindowBuffer, fill_window

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ViewportController:
    """Owns the aligned window offset and the buffer shown for it."""

    def __init__(self, source: ByteSource, visible_rows: int) -> None:
        self.source = source
        self.visible_rows = max(1, visible_rows)
        self.buffer = WindowBuffer()

    @property
    def window_offset(self) -> int:
        return self.buffer.offset

    def file_length(self) -> int:
        return self.source.length()

    def _jump_to(self, offset: int) -> None:
        """Replace the buffer with the window at ``offset``.

        The read happens before anything is committed, so a failing read
        leaves the previous buffer in place.
        """
        length = self.file_length()
        if offset < 0 or offset > length:
            raise OutOfRangeError(f"offset {offset} outside file of {length} bytes")
        self.buffer = fill_window(self.source, offset, self.visible_rows)

    def seek(self, target: int) -> tuple[int, int]:
        """Jump so that byte ``target`` sits in the first visible row.

        Negative targets count from the end of the file (``-1`` is the last
        byte). Returns ``(window_offset, col)`` where ``col`` is the column of
        the requested byte in row 0.
        """
        length = self.file_length()
        resolved = length + target if target < 0 else target
        if resolved < 0:
            logger.debug("seek %d rejected: resolves before start of file", target)
            raise OutOfRangeError(f"seek target {target} is before the start of the file")
        if resolved > length:
            logger.debug("seek %d rejected: past end of %d-byte file", target, length)
            raise OutOfRangeError(f"seek target {target} is past the end of the file")
        aligned = resolved - resolved % ROW_BYTES
        self._jump_to(aligned)
        return aligned, resolved - aligned

    def scroll(self, direction: Direction, count: int = 1) -> int:
        """Move the window by ``count`` rows; returns the new window offset."""
        delta = count * ROW_BYTES
        if direction is Direction.UP:
            new_offset = self.window_offset - delta
            if new_offset < 0:
                logger.debug("scroll up by %d rejected at offset %d", count, self.window_offset)
                raise OutOfRangeError("attempting to scroll up past the beginning of the file")
        elif direction is Direction.DOWN:
            new_offset = self.window_offset + delta
            if new_offset > self.file_length():
                logger.debug("scroll down by %d rejected at offset %d", count, self.window_offset)
                raise OutOfRangeError("attempting to scroll down past the end of the file")
        else:
            raise OutOfRangeError(f"cannot scroll {direction.value}")
        self._jump_to(new_offset)
        return new_offset

    def refill(self) -> WindowBuffer:
        """Re-read the current window, e.g. after a write or a resize."""
        self.buffer = fill_window(self.source, self.window_offset, self.visible_rows)
        return self.buffer

    def resize(self, visible_rows: int) -> None:
        self.visible_rows = max(1, visible_rows)
        self.refill()
