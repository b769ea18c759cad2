"""Editor facade: the operations the key loop drives.

Wires the viewport, cursor, and writer to the screen. Range and hex-entry
errors are reported on the status line and leave the view unchanged; read
failures keep the previous buffer on screen.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .byte_source import ByteSource
from .cursor import CursorController, CursorPosition
from .errors import ByteSourceError, InvalidHexDigitError, OutOfRangeError
from .layout import Rect, ViewGeometry
from .render import (
    PaneRegions,
    RenderedGrids,
    build_status_line,
    help_lines,
    highlight_cells,
    highlight_changes,
    paint_grids,
    paint_highlight,
    render_grids,
)
from .screen import Screen
from .ui_theme import UITheme
from .viewport import Direction, ViewportController
from .writer import ByteEditWriter, read_hex_byte

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5
MODE_NORMAL = "NORMAL"
MODE_REPLACE = "REPLACE"


def parse_offset(text: str) -> int:
    """Parse a goto target: decimal, ``0x``/``$`` hex, optionally negative."""
    value = text.strip().replace("_", "")
    negative = value.startswith("-")
    if negative or value.startswith("+"):
        value = value[1:]
    if value[:2].lower() == "0x":
        digits, base = value[2:], 16
    elif value.startswith("$"):
        digits, base = value[1:], 16
    else:
        digits, base = value, 10
    if not digits.isalnum():
        raise ValueError(f"invalid offset: {text!r}")
    number = int(digits, base)
    return -number if negative else number


class HexEditor:
    """Interactive hex view over one ``ByteSource``."""

    def __init__(
        self,
        source: ByteSource,
        screen: Screen,
        theme: UITheme,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.screen = screen
        self.theme = theme
        self._clock = clock
        self.geometry = ViewGeometry(screen.width, screen.height)
        self.viewport = ViewportController(source, self.geometry.visible_rows)
        self.cursor = CursorController(self.viewport)
        self.writer = ByteEditWriter(source)
        self.mode = MODE_NORMAL
        self.show_help = False
        self.status_message = ""
        self.status_is_error = False
        self.status_message_until = 0.0
        self._regions = self._build_regions()
        self._grids: RenderedGrids | None = None
        self._highlighted: CursorPosition | None = None

    def _build_regions(self) -> PaneRegions:
        geometry = self.geometry
        return PaneRegions(
            offsets=self.screen.region(geometry.offset_rect),
            hex=self.screen.region(geometry.hex_rect),
            canonical=self.screen.region(geometry.canonical_rect),
            separators=tuple(self.screen.region(rect) for rect in geometry.separator_rects()),
            status=self.screen.region(geometry.status_rect),
        )

    # Status line

    def set_status_message(self, message: str, *, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS

    def clear_expired_status(self) -> bool:
        """Drop an expired transient message; returns whether one was cleared."""
        if not self.status_message or self._clock() < self.status_message_until:
            return False
        self.status_message = ""
        self.status_is_error = False
        self.status_message_until = 0.0
        self.paint_status()
        return True

    def status_text(self) -> str:
        name = str(self.source.path) if self.source.path is not None else "<stream>"
        left = f"[{name}]"
        if self.source.read_only:
            left += "[ro]"
        left += f" -- {self.mode} --"
        if self.status_message:
            left += f"  {self.status_message}"
        try:
            length = self.source.length()
        except ByteSourceError:
            right = f"{self.cursor.resolve_offset():08x} {self.cursor.active_pane} "
        else:
            right = f"{self.cursor.resolve_offset():08x}/{length:08x} {self.cursor.active_pane} "
        return build_status_line(left, self.geometry.width, right)

    def paint_status(self) -> None:
        style = self.theme.status_error if self.status_is_error else self.theme.reverse
        self._regions.status.fill_row(0, self.status_text(), style)

    # Drawing

    def draw(self) -> None:
        """Repaint every pane from the current window buffer."""
        self.screen.clear()
        self._grids = render_grids(self.viewport.buffer, self.geometry.visible_rows)
        paint_grids(self._regions, self._grids, self.theme)
        for cell in highlight_cells(self.cursor.position):
            paint_highlight(self._regions, self._grids, cell, True, self.theme)
        self._highlighted = self.cursor.position
        if self.show_help:
            self._paint_help()
        self.paint_status()

    def _paint_help(self) -> None:
        region = self.screen.region(Rect(0, 0, self.geometry.visible_rows, self.geometry.width))
        region.fill_row(0, "lazyhex keys", self.theme.help_heading)
        for row, line in enumerate(help_lines(self.geometry.width), start=1):
            region.fill_row(row, line, self.theme.help_key)
        region.fill_row(len(help_lines(self.geometry.width)) + 1, "press ? to close", self.theme.help_dim)

    def _update_highlight(self) -> None:
        """Repaint only the cells whose emphasis changed."""
        if self._grids is None or self.show_help:
            self.draw()
            return
        for cell, emphasized in highlight_changes(self._highlighted, self.cursor.position):
            paint_highlight(self._regions, self._grids, cell, emphasized, self.theme)
        self._highlighted = self.cursor.position
        self.paint_status()

    def cursor_screen_yx(self) -> tuple[int, int]:
        position = self.cursor.position
        return self.geometry.cursor_screen_yx(self.cursor.active_pane, position.row, position.col)

    def refresh(self) -> None:
        """Place the terminal cursor on the active pane and flush output."""
        self.screen.place_cursor(*self.cursor_screen_yx())
        self.screen.flush()

    def resize(self, height: int, width: int) -> None:
        self.screen.resize(width, height)
        self.geometry = ViewGeometry(self.screen.width, self.screen.height)
        self._regions = self._build_regions()
        try:
            self.viewport.resize(self.geometry.visible_rows)
        except ByteSourceError as exc:
            logger.warning("refill after resize failed: %s", exc)
            self.set_status_message(str(exc), error=True)
        position = self.cursor.position
        self.cursor.place(position.row, position.col)
        self.draw()

    def toggle_help(self) -> None:
        self.show_help = not self.show_help
        self.draw()

    # Navigation

    def move_cursor(self, direction: Direction, count: int = 1) -> int:
        before = self.viewport.window_offset
        try:
            applied = self.cursor.move(direction, count)
        except ByteSourceError as exc:
            logger.warning("read failed while moving %s: %s", direction.value, exc)
            self.set_status_message(str(exc), error=True)
            applied = exc.applied
        else:
            if applied < count:
                edge = "start" if direction in (Direction.UP, Direction.LEFT) else "end"
                self.set_status_message(f"{edge} of file")
        if self.viewport.window_offset != before:
            self.draw()
        else:
            self._update_highlight()
        return applied

    def seek(self, target: int) -> bool:
        try:
            self.cursor.seek(target)
        except OutOfRangeError as exc:
            self.set_status_message(str(exc), error=True)
            self.paint_status()
            return False
        except ByteSourceError as exc:
            logger.warning("seek %d failed: %s", target, exc)
            self.set_status_message(str(exc), error=True)
            self.paint_status()
            return False
        self.draw()
        return True

    def scroll(self, direction: Direction, count: int = 1) -> bool:
        try:
            self.viewport.scroll(direction, count)
        except OutOfRangeError as exc:
            self.set_status_message(str(exc))
            self.paint_status()
            return False
        except ByteSourceError as exc:
            logger.warning("scroll %s failed: %s", direction.value, exc)
            self.set_status_message(str(exc), error=True)
            self.paint_status()
            return False
        self.draw()
        return True

    def page(self, direction: Direction) -> bool:
        return self.scroll(direction, self.geometry.visible_rows)

    def switch_pane(self) -> None:
        self.cursor.switch_pane()
        self.draw()

    # Editing

    def write_byte_at_cursor(self, value: int) -> bool:
        offset = self.cursor.resolve_offset()
        try:
            self.writer.write_byte(value, offset)
        except (OutOfRangeError, ByteSourceError) as exc:
            logger.warning("write of %#04x at %#x failed: %s", value, offset, exc)
            self.set_status_message(f"write failed: {exc}", error=True)
            self.paint_status()
            return False
        try:
            self.viewport.refill()
        except ByteSourceError as exc:
            logger.warning("refill after write failed: %s", exc)
            self.set_status_message(str(exc), error=True)
        self.draw()
        return True

    def replace_byte(self, read_key: Callable[[], str]) -> bool | None:
        """Read two hex keys and write them under the cursor.

        Returns ``None`` when cancelled, otherwise whether the write landed.
        Raises ``InvalidHexDigitError`` without touching the file.
        """
        value = read_hex_byte(read_key)
        if value is None:
            return None
        return self.write_byte_at_cursor(value)

    def enter_replace_mode(self, read_key: Callable[[], str]) -> int:
        """Overwrite consecutive bytes until cancelled; returns bytes written."""
        written = 0
        self.mode = MODE_REPLACE
        self.paint_status()
        self.refresh()
        try:
            while True:
                try:
                    result = self.replace_byte(read_key)
                except InvalidHexDigitError as exc:
                    self.set_status_message(str(exc), error=True)
                    self.paint_status()
                    self.refresh()
                    continue
                if not result:
                    break
                written += 1
                self.move_cursor(Direction.RIGHT, 1)
                self.refresh()
        finally:
            self.mode = MODE_NORMAL
            self.draw()
        return written

    # Prompt

    def prompt(self, read_key: Callable[[], str], prefix: str = ":") -> str | None:
        """Edit a one-line command on the status row; ``None`` when cancelled.

        End of input cancels the prompt.
        """
        text = ""
        status = self._regions.status
        while True:
            status.fill_row(0, prefix + text)
            row, col = status.absolute(0, len(prefix) + len(text))
            self.screen.place_cursor(row, col)
            self.screen.flush()
            key = read_key()
            if key in ("ENTER", "ENTER_CR", "ENTER_LF"):
                break
            if not key or key in ("ESC", "CTRL_C"):
                text = ""
                break
            if key == "BACKSPACE":
                if not text:
                    break
                text = text[:-1]
            elif len(key) == 1 and key.isprintable():
                text += key
        self.paint_status()
        return text or None

    def execute_command(self, command: str) -> bool:
        """Run a prompt command; returns ``False`` when it asks to quit.

        Anything other than ``q``/``quit`` is a goto offset.
        """
        command = command.strip()
        if command in ("q", "quit"):
            return False
        try:
            target = parse_offset(command)
        except ValueError:
            self.set_status_message(f"{command}: not an offset", error=True)
            self.paint_status()
            return True
        self.seek(target)
        return True
