"""UI theme definitions and selection helpers.

A theme maps each semantic cell highlight and the chrome lines to an ANSI
prefix. The renderer decides which highlight applies; the theme decides how
it looks.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HexTheme:
    """Semantic ANSI palette used by the frame composer."""

    name: str
    reset: str
    offset_label: str
    plain: str
    cursor: str
    cursor_padding: str
    padding: str
    modified: str
    status: str
    message: str
    prompt: str


DEFAULT_THEME = HexTheme(
    name="default",
    reset="\033[0m",
    offset_label="",
    plain="",
    cursor="\033[40;37m",
    cursor_padding="\033[41;37m",
    padding="\033[31m",
    modified="\033[106m",
    status="\033[1;31m",
    message="",
    prompt="\033[1m",
)

OCEAN_THEME = HexTheme(
    name="ocean",
    reset="\033[0m",
    offset_label="\033[2;38;5;110m",
    plain="\033[38;5;252m",
    cursor="\033[1;48;5;24;38;5;231m",
    cursor_padding="\033[48;5;31;38;5;231m",
    padding="\033[2;38;5;31m",
    modified="\033[48;5;30;38;5;231m",
    status="\033[1;38;5;45m",
    message="\033[38;5;153m",
    prompt="\033[1;38;5;45m",
)

PLAIN_THEME = HexTheme(
    name="plain",
    reset="",
    offset_label="",
    plain="",
    cursor="",
    cursor_padding="",
    padding="",
    modified="",
    status="",
    message="",
    prompt="",
)

_THEMES: dict[str, HexTheme] = {
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> HexTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "HexTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
