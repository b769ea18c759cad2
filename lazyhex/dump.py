"""Non-interactive hex dump using the same row layout as the editor."""

from __future__ import annotations

from collections.abc import Iterator

from .byte_source import ByteSource
from .errors import OutOfRangeError
from .layout import SEPARATOR
from .render import canonical_row, hex_row, offset_label
from .window_buffer import ROW_BYTES

DUMP_CHUNK_ROWS = 256


def format_dump_row(offset: int, chunk: bytes) -> str:
    return f"{offset_label(offset)}{SEPARATOR}{hex_row(chunk)}{SEPARATOR}{canonical_row(chunk)}{SEPARATOR.rstrip()}"


def iter_dump_rows(source: ByteSource, start: int = 0, rows: int | None = None) -> Iterator[str]:
    """Yield formatted rows from the row containing ``start``.

    Negative ``start`` counts from the end of the file. ``rows=None`` dumps
    through the end of the file.
    """
    length = source.length()
    resolved = length + start if start < 0 else start
    if resolved < 0 or resolved > length:
        raise OutOfRangeError(f"dump start {start} is outside the {length}-byte file")
    offset = resolved - resolved % ROW_BYTES
    emitted = 0
    while rows is None or emitted < rows:
        batch = DUMP_CHUNK_ROWS if rows is None else min(DUMP_CHUNK_ROWS, rows - emitted)
        data = source.read_at(offset, batch * ROW_BYTES)
        if not data:
            return
        for index in range(0, len(data), ROW_BYTES):
            yield format_dump_row(offset + index, data[index : index + ROW_BYTES])
            emitted += 1
        if len(data) < batch * ROW_BYTES:
            return
        offset += len(data)
