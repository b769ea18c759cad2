"""Render layout engine for the offset, hex, and canonical panes.

The grid builders are pure functions of the window buffer. Paint helpers take
``Region`` handles and never touch the terminal directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from .cursor import CursorPosition
from .layout import CANONICAL_PANE, HEX_PANE, PANES, SEPARATOR, Pane
from .screen import Region
from .ui_theme import UITheme
from .window_buffer import ROW_BYTES, WindowBuffer

BLANK_HEX = "  "
BLANK_CHAR = " "
PLACEHOLDER_CHAR = "."

HELP_LINES: tuple[tuple[str, str], ...] = (
    ("h/j/k/l, arrows", "move cursor (prefix a count: 5j)"),
    ("u / d", "scroll one row up / down"),
    ("PgUp / PgDn", "scroll one page"),
    ("g / Home", "jump to start of file"),
    ("G / End", "jump to last byte"),
    (":", "go to offset (123, 0x7b, -0x10)"),
    ("Tab", "switch hex / canonical pane"),
    ("r", "replace byte under cursor"),
    ("R", "replace mode (Esc to leave)"),
    ("?", "toggle this help"),
    ("q", "quit"),
)


def is_printable(byte: int) -> bool:
    return 0x20 <= byte < 0x7F


def canonical_char(byte: int | None) -> str:
    if byte is None:
        return BLANK_CHAR
    return chr(byte) if is_printable(byte) else PLACEHOLDER_CHAR


def hex_cell(byte: int | None) -> str:
    return BLANK_HEX if byte is None else f"{byte:02x}"


def offset_label(offset: int) -> str:
    return f"{offset:08x}"


def hex_row(chunk: bytes) -> str:
    """Format one row as 2-byte groups; missing bytes render as blanks."""
    out: list[str] = []
    for b in range(ROW_BYTES):
        if b and b % 2 == 0:
            out.append(" ")
        out.append(hex_cell(chunk[b] if b < len(chunk) else None))
    return "".join(out)


def canonical_row(chunk: bytes) -> str:
    return "".join(canonical_char(chunk[b] if b < len(chunk) else None) for b in range(ROW_BYTES))


@dataclass(frozen=True)
class RenderedGrids:
    offsets: tuple[str, ...]
    hex: tuple[str, ...]
    canonical: tuple[str, ...]

    def rows_for(self, pane: Pane) -> tuple[str, ...]:
        return {HEX_PANE: self.hex, CANONICAL_PANE: self.canonical}[pane]


def render_grids(buffer: WindowBuffer, rows: int) -> RenderedGrids:
    """Build the three text grids for ``rows`` visible rows of ``buffer``."""
    offsets: list[str] = []
    hex_rows: list[str] = []
    canonical_rows: list[str] = []
    for row in range(rows):
        chunk = buffer.row_bytes(row)
        offsets.append(offset_label(buffer.offset + row * ROW_BYTES))
        hex_rows.append(hex_row(chunk))
        canonical_rows.append(canonical_row(chunk))
    return RenderedGrids(tuple(offsets), tuple(hex_rows), tuple(canonical_rows))


@dataclass(frozen=True)
class HighlightCell:
    """Screen span within one pane that marks the byte under the cursor."""

    pane: Pane
    row: int
    col: int
    width: int


def highlight_cells(position: CursorPosition) -> tuple[HighlightCell, HighlightCell]:
    """Cursor spans in both byte panes for grid cell ``position``."""
    return tuple(
        HighlightCell(pane, position.row, pane.column_for(position.col), pane.cell_width)
        for pane in PANES
    )


def highlight_changes(
    previous: CursorPosition | None,
    current: CursorPosition,
) -> list[tuple[HighlightCell, bool]]:
    """Cells to repaint when the cursor moves, as ``(cell, emphasized)`` pairs.

    The previous cells are cleared first, then the current ones set. Nothing
    changes when the position is the same.
    """
    if previous == current:
        return []
    changes: list[tuple[HighlightCell, bool]] = []
    if previous is not None:
        changes.extend((cell, False) for cell in highlight_cells(previous))
    changes.extend((cell, True) for cell in highlight_cells(current))
    return changes


def cell_text(grids: RenderedGrids, cell: HighlightCell) -> str:
    rows = grids.rows_for(cell.pane)
    if cell.row >= len(rows):
        return " " * cell.width
    return rows[cell.row][cell.col : cell.col + cell.width].ljust(cell.width)


@dataclass(frozen=True)
class PaneRegions:
    offsets: Region
    hex: Region
    canonical: Region
    separators: tuple[Region, ...]
    status: Region

    def for_pane(self, pane: Pane) -> Region:
        return {HEX_PANE: self.hex, CANONICAL_PANE: self.canonical}[pane]


def paint_grids(regions: PaneRegions, grids: RenderedGrids, theme: UITheme) -> None:
    for row, label in enumerate(grids.offsets):
        regions.offsets.fill_row(row, label, theme.offset)
    for pane in PANES:
        region = regions.for_pane(pane)
        for row, text in enumerate(grids.rows_for(pane)):
            region.fill_row(row, text, pane.style_for(theme))
    for region in regions.separators:
        for row in range(region.rect.height):
            region.put(row, 0, SEPARATOR, theme.divider)


def paint_highlight(
    regions: PaneRegions,
    grids: RenderedGrids,
    cell: HighlightCell,
    emphasized: bool,
    theme: UITheme,
) -> None:
    style = theme.cursor if emphasized else cell.pane.style_for(theme)
    regions.for_pane(cell.pane).put(cell.row, cell.col, cell_text(grids, cell), style)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def help_lines(width: int) -> list[str]:
    key_width = max(len(key) for key, _ in HELP_LINES)
    return [f"  {key.ljust(key_width)}  {text}"[:width] for key, text in HELP_LINES]
