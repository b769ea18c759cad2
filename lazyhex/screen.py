"""Full-screen drawing surface with independent rectangular regions.

``Screen`` is the single owner of terminal output. Panes paint through
``Region`` handles that clip to their own rectangle; everything is buffered
and written with one ``os.write`` per ``flush``.
"""

from __future__ import annotations

import os
import sys

from .layout import Rect


class Region:
    """Opaque paint handle for one rectangle of a ``Screen``."""

    def __init__(self, screen: Screen, rect: Rect) -> None:
        self._screen = screen
        self.rect = rect

    def absolute(self, row: int, col: int) -> tuple[int, int]:
        return self.rect.top + row, self.rect.left + col

    def put(self, row: int, col: int, text: str, style: str = "") -> None:
        """Paint ``text`` at region-relative ``(row, col)``, clipped to the region."""
        if row < 0 or row >= self.rect.height or col < 0 or col >= self.rect.width:
            return
        text = text[: self.rect.width - col]
        if not text:
            return
        y, x = self.absolute(row, col)
        self._screen.put(y, x, text, style)

    def fill_row(self, row: int, text: str = "", style: str = "") -> None:
        """Paint ``text`` from column 0 and pad the rest of the row with blanks."""
        self.put(row, 0, text.ljust(self.rect.width), style)

    def clear(self) -> None:
        for row in range(self.rect.height):
            self.fill_row(row)


class Screen:
    def __init__(self, width: int, height: int, out_fd: int | None = None) -> None:
        self.width = max(1, width)
        self.height = max(1, height)
        self._out_fd = out_fd
        self._pending: list[str] = []

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    def region(self, rect: Rect) -> Region:
        return Region(self, rect)

    @property
    def pending(self) -> str:
        return "".join(self._pending)

    def put(self, y: int, x: int, text: str, style: str = "") -> None:
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return
        text = text[: self.width - x]
        out = [f"\033[{y + 1};{x + 1}H"]
        if style:
            out.append(style)
            out.append(text)
            out.append("\033[0m")
        else:
            out.append(text)
        self._pending.append("".join(out))

    def clear(self) -> None:
        self._pending.append("\033[H\033[2J")

    def place_cursor(self, y: int, x: int) -> None:
        y = max(0, min(y, self.height - 1))
        x = max(0, min(x, self.width - 1))
        self._pending.append(f"\033[{y + 1};{x + 1}H")

    def flush(self) -> None:
        if not self._pending:
            return
        payload = "".join(self._pending).encode("utf-8", errors="replace")
        self._pending.clear()
        fd = self._out_fd if self._out_fd is not None else sys.stdout.fileno()
        os.write(fd, payload)
