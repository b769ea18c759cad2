"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the pane chrome and cursor emphasis. The pygments
style used by ``--dump`` output is a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    offset: str
    hex_byte: str
    canonical_text: str
    cursor: str
    status_mode: str
    status_error: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    offset="\033[38;5;109m",
    hex_byte="\033[38;5;252m",
    canonical_text="\033[38;5;229m",
    cursor="\033[1;7m",
    status_mode="\033[1;7m",
    status_error="\033[1;7;31m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    offset="\033[38;5;73m",
    hex_byte="\033[38;5;153m",
    canonical_text="\033[38;5;117m",
    cursor="\033[1;7;38;5;45m",
    status_mode="\033[1;7;38;5;45m",
    status_error="\033[1;7;38;5;203m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

# Attributes only: the cursor must stay visible without colors.
PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    offset="",
    hex_byte="",
    canonical_text="",
    cursor="\033[1;7m",
    status_mode="\033[7m",
    status_error="\033[7m",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
