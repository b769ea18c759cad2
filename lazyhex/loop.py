"""Main interactive event loop for the terminal UI.

Polls for resizes and expired status messages between keys; everything else
is dispatched to the normal-mode key handler.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from .editor import HexEditor
from .input import read_key
from .keys import NormalKeyHandler
from .terminal import TerminalController

POLL_TIMEOUT_MS = 200


def run_main_loop(
    editor: HexEditor,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    get_size: Callable[[], tuple[int, int]] | None = None,
) -> None:
    """Run the TUI until the operator quits."""
    size = get_size if get_size is not None else terminal.size
    blocking_read = partial(read_key, stdin_fd)
    handler = NormalKeyHandler(editor, blocking_read)

    with terminal.raw_mode():
        height, width = size()
        editor.resize(height, width)
        editor.refresh()
        while True:
            height, width = size()
            if (height, width) != (editor.geometry.height, editor.geometry.width):
                editor.resize(height, width)
            editor.clear_expired_status()
            editor.refresh()

            key = read_key(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            if not key:
                continue
            if not handler.handle_key(key):
                break
            editor.refresh()
