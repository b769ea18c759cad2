"""Bytes currently visible in the viewport."""

from __future__ import annotations

from dataclasses import dataclass

from .byte_source import ByteSource

ROW_BYTES = 16


@dataclass(frozen=True)
class WindowBuffer:
    """Immutable snapshot of the file region starting at ``offset``.

    A new instance replaces the old one on every seek, scroll, or refill.
    ``offset`` is always a multiple of ``ROW_BYTES``.
    """

    offset: int = 0
    data: bytes = b""

    def __len__(self) -> int:
        return len(self.data)

    def byte_at(self, row: int, col: int) -> int | None:
        """Return the byte at grid cell ``(row, col)`` or ``None`` past the end."""
        index = row * ROW_BYTES + col
        if 0 <= index < len(self.data):
            return self.data[index]
        return None

    def row_bytes(self, row: int) -> bytes:
        start = row * ROW_BYTES
        return self.data[start : start + ROW_BYTES]


def fill_window(source: ByteSource, offset: int, rows: int) -> WindowBuffer:
    """Read up to ``rows`` full rows at ``offset`` without moving the handle."""
    if offset % ROW_BYTES:
        raise ValueError(f"window offset {offset} is not {ROW_BYTES}-byte aligned")
    return WindowBuffer(offset=offset, data=source.read_at(offset, max(0, rows) * ROW_BYTES))
