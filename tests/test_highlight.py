from __future__ import annotations

import re
import unittest

from lazyhex.dump import format_dump_row
from lazyhex.highlight import DEFAULT_STYLE, highlight_dump, normalize_style
from lazyhex.ui_theme import OCEAN_THEME, PLAIN_THEME, resolve_theme

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class HighlightDumpTests(unittest.TestCase):
    def test_empty_text_is_returned_unchanged(self) -> None:
        self.assertEqual(highlight_dump(""), "")

    def test_unknown_style_falls_back(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), DEFAULT_STYLE)
        self.assertEqual(normalize_style(None), DEFAULT_STYLE)
        self.assertEqual(normalize_style("native"), "native")

    def test_colorized_dump_keeps_text(self) -> None:
        text = format_dump_row(0, b"ABCDEFGHIJKLMNOP") + "\n"
        colored = highlight_dump(text, "monokai")
        self.assertIn("\x1b[", colored)
        self.assertEqual(_ANSI_RE.sub("", colored), text)


class ThemeSelectionTests(unittest.TestCase):
    def test_resolve_theme_normalizes_name_and_honours_no_color(self) -> None:
        self.assertIs(resolve_theme(" Ocean "), OCEAN_THEME)
        self.assertEqual(resolve_theme("missing").name, "default")
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()
