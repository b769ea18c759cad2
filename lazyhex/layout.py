"""View geometry: pane widths, separators, and per-pane column mapping.

Column mapping for each pane is a small pure function carried by its
``Pane`` value, so callers never branch on which pane is active.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .ui_theme import UITheme
from .window_buffer import ROW_BYTES

OFFSET_PANE_WIDTH = 8
HEX_PANE_WIDTH = ROW_BYTES * 2 + (ROW_BYTES // 2 - 1)
CANONICAL_PANE_WIDTH = ROW_BYTES
SEPARATOR = " | "
SEPARATOR_WIDTH = len(SEPARATOR)
STATUS_ROWS = 1


def hex_column(col: int) -> int:
    """Screen column of byte ``col`` in the hex pane (2-byte groups)."""
    return col * 2 + col // 2


def canonical_column(col: int) -> int:
    return col


@dataclass(frozen=True)
class Pane:
    """A byte pane, how a grid column maps onto its screen columns, and its text style."""

    name: str
    column_for: Callable[[int], int]
    cell_width: int
    style_for: Callable[[UITheme], str]

    def __str__(self) -> str:
        return self.name


HEX_PANE = Pane("hex", hex_column, 2, lambda theme: theme.hex_byte)
CANONICAL_PANE = Pane("canonical", canonical_column, 1, lambda theme: theme.canonical_text)
PANES: tuple[Pane, ...] = (HEX_PANE, CANONICAL_PANE)


def next_pane(pane: Pane) -> Pane:
    return PANES[(PANES.index(pane) + 1) % len(PANES)]


@dataclass(frozen=True)
class Rect:
    top: int
    left: int
    height: int
    width: int


@dataclass(frozen=True)
class ViewGeometry:
    """Screen rectangles for every pane, derived from the terminal size."""

    width: int
    height: int

    @property
    def visible_rows(self) -> int:
        return max(1, self.height - STATUS_ROWS)

    @property
    def offset_rect(self) -> Rect:
        return Rect(0, 0, self.visible_rows, OFFSET_PANE_WIDTH)

    @property
    def hex_rect(self) -> Rect:
        return Rect(0, OFFSET_PANE_WIDTH + SEPARATOR_WIDTH, self.visible_rows, HEX_PANE_WIDTH)

    @property
    def canonical_rect(self) -> Rect:
        left = OFFSET_PANE_WIDTH + SEPARATOR_WIDTH * 2 + HEX_PANE_WIDTH
        return Rect(0, left, self.visible_rows, CANONICAL_PANE_WIDTH)

    def separator_rects(self) -> tuple[Rect, Rect, Rect]:
        hex_rect = self.hex_rect
        canonical_rect = self.canonical_rect
        return (
            Rect(0, OFFSET_PANE_WIDTH, self.visible_rows, SEPARATOR_WIDTH),
            Rect(0, hex_rect.left + hex_rect.width, self.visible_rows, SEPARATOR_WIDTH),
            Rect(0, canonical_rect.left + canonical_rect.width, self.visible_rows, SEPARATOR_WIDTH),
        )

    @property
    def status_rect(self) -> Rect:
        return Rect(max(0, self.height - STATUS_ROWS), 0, STATUS_ROWS, self.width)

    def pane_rects(self) -> dict[Pane, Rect]:
        return {HEX_PANE: self.hex_rect, CANONICAL_PANE: self.canonical_rect}

    def pane_rect(self, pane: Pane) -> Rect:
        return self.pane_rects()[pane]

    def cursor_screen_yx(self, pane: Pane, row: int, col: int) -> tuple[int, int]:
        """Absolute screen coordinates of grid cell ``(row, col)`` in ``pane``."""
        rect = self.pane_rect(pane)
        return rect.top + row, rect.left + pane.column_for(col)
