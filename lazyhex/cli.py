"""Command-line front door for lazyhex.

Parses CLI options, opens the target file (read-write, falling back to
read-only), and either prints a dump or launches the interactive editor.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import config
from .byte_source import ByteSource
from .dump import iter_dump_rows
from .editor import HexEditor, parse_offset
from .errors import HexEditError
from .highlight import highlight_dump
from .loop import run_main_loop
from .screen import Screen
from .terminal import TerminalController
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _offset(value: str) -> int:
    """argparse type for goto offsets (decimal, 0x hex, negative from end)."""
    try:
        return parse_offset(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid offset: {value!r}") from exc


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: Path | None) -> None:
    """Send package logs to ``log_file`` at DEBUG; the TUI never logs to the terminal."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("lazyhex")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lazyhex", description="View and patch a binary file in the terminal.")
    parser.add_argument("file", type=Path, help="File to open.")
    parser.add_argument(
        "--offset",
        type=_offset,
        default=0,
        help="Initial offset: decimal, 0x-prefixed hex, negative counts from the end.",
    )
    parser.add_argument("--read-only", action="store_true", help="Open the file read-only.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for --dump output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--dump", action="store_true", help="Print a hex dump and exit.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Rows to print with --dump.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def open_source(path: Path, read_only: bool) -> ByteSource:
    """Open ``path`` for editing, exiting with a diagnostic when that fails."""
    if path.is_dir():
        raise SystemExit(f"lazyhex: {path}: is a directory")
    try:
        return ByteSource.open(path, read_only=read_only)
    except OSError as exc:
        raise SystemExit(f"lazyhex: {path}: {exc.strerror or exc}") from exc


def dump(source: ByteSource, offset: int, rows: int | None, style: str | None, color: bool) -> None:
    try:
        text = "".join(row + "\n" for row in iter_dump_rows(source, offset, rows))
    except HexEditError as exc:
        raise SystemExit(f"lazyhex: {exc}") from exc
    if color:
        text = highlight_dump(text, style)
    sys.stdout.write(text)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazyhex on one file."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    if args.theme is not None:
        config.save_theme_name(args.theme)
    if args.style is not None:
        config.save_style_name(args.style)
    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    style_name = args.style if args.style is not None else config.load_style_name()

    if not args.dump and (not sys.stdin.isatty() or not sys.stdout.isatty()):
        raise SystemExit("lazyhex: interactive mode needs a terminal (use --dump)")

    with open_source(args.file, args.read_only or args.dump) as source:
        logger.info("opened %s (%s)", args.file, "read-only" if source.read_only else "read-write")
        if args.dump:
            dump(source, args.offset, args.rows, style_name, color=sys.stdout.isatty() and not args.no_color)
            return

        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        height, width = terminal.size()
        editor = HexEditor(
            source,
            Screen(width, height, out_fd=sys.stdout.fileno()),
            resolve_theme(theme_name, no_color=args.no_color or "NO_COLOR" in os.environ),
        )
        if not editor.seek(args.offset):
            editor.seek(0)
        run_main_loop(editor, terminal, sys.stdin.fileno())


if __name__ == "__main__":
    main()
