"""Cursor state machine over the viewport grid.

Steps that cross the top or bottom edge of the window ask the viewport to
scroll by one row instead of moving the cursor. A rejected scroll ends the
move, so the cursor never wraps past the start or end of the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import ByteSourceError, OutOfRangeError
from .layout import HEX_PANE, Pane, next_pane
from .viewport import Direction, ViewportController
from .window_buffer import ROW_BYTES

logger = logging.getLogger(__name__)

LAST_COL = ROW_BYTES - 1


@dataclass(frozen=True)
class CursorPosition:
    row: int = 0
    col: int = 0


class CursorController:
    """2-D grid position plus active pane, bound to one viewport."""

    def __init__(self, viewport: ViewportController, pane: Pane = HEX_PANE) -> None:
        self.viewport = viewport
        self.position = CursorPosition()
        self.active_pane = pane

    @property
    def last_row(self) -> int:
        return self.viewport.visible_rows - 1

    def resolve_offset(self) -> int:
        """Absolute file offset of the byte under the cursor."""
        return self.viewport.window_offset + self.position.row * ROW_BYTES + self.position.col

    def place(self, row: int, col: int) -> None:
        row = max(0, min(row, self.last_row))
        col = max(0, min(col, LAST_COL))
        self.position = CursorPosition(row, col)

    def seek(self, target: int) -> int:
        """Seek the viewport and land the cursor on byte ``target``."""
        window_offset, col = self.viewport.seek(target)
        self.position = CursorPosition(0, col)
        return window_offset

    def step(self, direction: Direction) -> None:
        """Apply one directional transition; raises ``OutOfRangeError`` at a file edge."""
        row, col = self.position.row, self.position.col
        if direction is Direction.UP:
            if row > 0:
                row -= 1
            else:
                self.viewport.scroll(Direction.UP, 1)
        elif direction is Direction.DOWN:
            if row < self.last_row:
                row += 1
            else:
                self.viewport.scroll(Direction.DOWN, 1)
        elif direction is Direction.LEFT:
            if col > 0:
                col -= 1
            elif row > 0:
                row, col = row - 1, LAST_COL
            else:
                self.viewport.scroll(Direction.UP, 1)
                col = LAST_COL
        elif direction is Direction.RIGHT:
            if col < LAST_COL:
                col += 1
            elif row < self.last_row:
                row, col = row + 1, 0
            else:
                self.viewport.scroll(Direction.DOWN, 1)
                col = 0
        self.position = CursorPosition(row, col)

    def move(self, direction: Direction, count: int = 1) -> int:
        """Repeat ``step`` up to ``count`` times; returns the steps applied.

        Stops at the first rejected scroll. Steps already applied are kept.
        A ``ByteSourceError`` propagates with ``applied`` set to the steps
        completed before it.
        """
        applied = 0
        for _ in range(max(0, count)):
            try:
                self.step(direction)
            except OutOfRangeError as exc:
                logger.debug("move %s stopped after %d/%d steps: %s", direction.value, applied, count, exc)
                break
            except ByteSourceError as exc:
                exc.applied = applied
                raise
            applied += 1
        return applied

    def switch_pane(self) -> Pane:
        self.active_pane = next_pane(self.active_pane)
        return self.active_pane
