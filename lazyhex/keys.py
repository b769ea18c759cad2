"""Normal-mode key dispatch for the hex editor.

Maps key tokens from ``read_key`` onto ``HexEditor`` operations. Digits typed
before a key form a repeat count (``5j``), the way pagers handle counts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .editor import HexEditor
from .errors import InvalidHexDigitError
from .viewport import Direction


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a counted action."""

    keys: tuple[str, ...]
    handler: Callable[[int], object]


class KeyRegistry:
    """Small key-dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[int], object]] = {}

    def register_bindings(self, *bindings: KeyBinding) -> KeyRegistry:
        """Register bindings, overwriting existing handlers for the same keys."""
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def is_bound(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str, count: int = 1) -> bool:
        """Invoke the handler for ``key``; returns whether one was bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler(count)
        return True


class NormalKeyHandler:
    """Stateful normal-mode dispatcher bound to one editor."""

    def __init__(self, editor: HexEditor, read_key: Callable[[], str]) -> None:
        self.editor = editor
        self.read_key = read_key
        self.count_buffer = ""
        self.quit_requested = False
        self.registry = KeyRegistry().register_bindings(
            KeyBinding(("q",), lambda _count: self._quit()),
            KeyBinding(("h", "LEFT"), lambda count: self._move(Direction.LEFT, count)),
            KeyBinding(("j", "DOWN"), lambda count: self._move(Direction.DOWN, count)),
            KeyBinding(("k", "UP"), lambda count: self._move(Direction.UP, count)),
            KeyBinding(("l", "RIGHT"), lambda count: self._move(Direction.RIGHT, count)),
            KeyBinding(("u",), lambda count: self.editor.scroll(Direction.UP, count)),
            KeyBinding(("d",), lambda count: self.editor.scroll(Direction.DOWN, count)),
            KeyBinding(("PAGE_UP",), lambda _count: self.editor.page(Direction.UP)),
            KeyBinding(("PAGE_DOWN",), lambda _count: self.editor.page(Direction.DOWN)),
            KeyBinding(("g", "HOME"), lambda _count: self.editor.seek(0)),
            KeyBinding(("G", "END"), lambda _count: self.editor.seek(-1)),
            KeyBinding(("TAB",), lambda _count: self.editor.switch_pane()),
            KeyBinding(("r",), lambda _count: self._replace_one()),
            KeyBinding(("R",), lambda _count: self.editor.enter_replace_mode(self.read_key)),
            KeyBinding((":",), lambda _count: self._command()),
            KeyBinding(("?",), lambda _count: self.editor.toggle_help()),
            KeyBinding(("ESC",), lambda _count: self._escape()),
        )

    def _quit(self) -> None:
        self.quit_requested = True

    def _move(self, direction: Direction, count: int) -> None:
        self.editor.move_cursor(direction, count)

    def _replace_one(self) -> None:
        try:
            self.editor.replace_byte(self.read_key)
        except InvalidHexDigitError as exc:
            self.editor.set_status_message(str(exc), error=True)
            self.editor.paint_status()

    def _command(self) -> None:
        command = self.editor.prompt(self.read_key)
        if command is not None and not self.editor.execute_command(command):
            self._quit()

    def _escape(self) -> None:
        if self.editor.show_help:
            self.editor.toggle_help()

    def handle_key(self, key: str) -> bool:
        """Handle one key; returns ``False`` when the session should end."""
        if len(key) == 1 and key.isdigit() and (self.count_buffer or key != "0"):
            self.count_buffer += key
            return True
        count = int(self.count_buffer) if self.count_buffer else 1
        self.count_buffer = ""
        self.registry.dispatch(key, count)
        return not self.quit_requested
