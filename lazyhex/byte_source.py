"""Ownership wrapper around the single file handle being edited.

Every positioned read and write goes through ``scoped_seek`` so the handle's
seek position is restored on every exit path, including errors.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from .errors import ByteSourceError

logger = logging.getLogger(__name__)


class ByteSource:
    """Exclusive owner of one seekable, readable (optionally writable) file."""

    def __init__(self, handle: BinaryIO, path: Path | None = None, read_only: bool = False) -> None:
        self._handle = handle
        self.path = path
        self.read_only = read_only

    @classmethod
    def open(cls, path: Path, read_only: bool = False) -> ByteSource:
        """Open ``path`` read-write, falling back to read-only on failure.

        A missing file is created when possible. ``OSError`` from the
        read-only fallback propagates to the caller.
        """
        if not read_only:
            try:
                fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
            except OSError as exc:
                logger.info("opening %s read-write failed (%s); retrying read-only", path, exc)
            else:
                return cls(os.fdopen(fd, "r+b", buffering=0), path=path)
        return cls(open(path, "rb", buffering=0), path=path, read_only=True)

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def position(self) -> int:
        """Return the handle's current seek position."""
        try:
            return self._handle.tell()
        except (OSError, ValueError) as exc:
            raise ByteSourceError(f"tell failed: {exc}") from exc

    def _seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        try:
            return self._handle.seek(offset, whence)
        except (OSError, ValueError) as exc:
            raise ByteSourceError(f"seek to {offset} failed: {exc}") from exc

    @contextlib.contextmanager
    def scoped_seek(self, offset: int, whence: int = io.SEEK_SET) -> Iterator[int]:
        """Relocate the handle for the duration of the block, then restore it.

        Yields the relocated absolute position.
        """
        saved = self.position()
        try:
            yield self._seek(offset, whence)
        finally:
            self._seek(saved)

    def length(self) -> int:
        """Return the current file length in bytes."""
        with self.scoped_seek(0, io.SEEK_END) as end:
            return end

    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to ``size`` bytes at ``offset``; short reads are not errors."""
        if size <= 0:
            return b""
        chunks: list[bytes] = []
        remaining = size
        with self.scoped_seek(offset):
            while remaining > 0:
                try:
                    chunk = self._handle.read(remaining)
                except (OSError, ValueError) as exc:
                    raise ByteSourceError(f"read at {offset} failed: {exc}") from exc
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        return b"".join(chunks)

    def write_at(self, offset: int, data: bytes) -> int:
        """Write ``data`` at ``offset`` in place and return the byte count."""
        if self.read_only:
            raise ByteSourceError("file is opened read-only")
        with self.scoped_seek(offset):
            try:
                written = self._handle.write(data)
                self._handle.flush()
            except (OSError, ValueError) as exc:
                raise ByteSourceError(f"write at {offset} failed: {exc}") from exc
        if written != len(data):
            raise ByteSourceError(f"short write at {offset}: {written}/{len(data)} bytes")
        return written
