"""Pygments colorization for non-interactive dump output.

Pygments is imported lazily so the interactive editor never pays for it.
Unknown style names fall back to ``monokai``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_HEXDUMP_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()
_PYGMENTS_FORMATTERS: dict[str, object] = {}


def _ensure_pygments_loaded() -> bool:
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_HEXDUMP_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import HexdumpLexer
        from pygments.styles import get_style_by_name
    except ImportError as exc:
        logger.warning("pygments unavailable, dump output stays plain: %s", exc)
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_HEXDUMP_LEXER = HexdumpLexer
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def normalize_style(style: str | None) -> str:
    if not style:
        return DEFAULT_STYLE
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES or not _ensure_pygments_loaded():
        return DEFAULT_STYLE

    from pygments.util import ClassNotFound

    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except ClassNotFound:
        _PYGMENTS_INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _PYGMENTS_VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def highlight_dump(text: str, style: str | None = DEFAULT_STYLE) -> str:
    """Return ``text`` colorized as a hex dump, or unchanged without pygments."""
    if not text or not _ensure_pygments_loaded():
        return text
    style = normalize_style(style)
    assert _PYGMENTS_HIGHLIGHT is not None and _PYGMENTS_HEXDUMP_LEXER is not None
    return _PYGMENTS_HIGHLIGHT(text, _PYGMENTS_HEXDUMP_LEXER(), _formatter_for_style(style))
