"""Non-interactive hex dump to standard output.

Prints the same grid the interactive view shows, for the whole buffer, with
no cursor, history or raw mode involved. Output is colored through pygments
when it goes to a terminal.
"""

from __future__ import annotations

import sys
from typing import TextIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import HexdumpLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .render import dump_lines

DEFAULT_STYLE = "monokai"


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def dump_text(data: bytes, columns_per_row: int) -> str:
    """Return the full grid followed by one empty line."""
    lines = dump_lines(data, columns_per_row)
    return "".join(f"{line}\n" for line in lines) + "\n"


def colorize_dump(text: str, style: str = DEFAULT_STYLE) -> str:
    return highlight(text, HexdumpLexer(stripnl=False), TerminalFormatter(style=_normalize_style(style)))


def print_dump(
    data: bytes,
    columns_per_row: int,
    *,
    color: bool,
    style: str = DEFAULT_STYLE,
    stream: TextIO | None = None,
) -> None:
    out = sys.stdout if stream is None else stream
    text = dump_text(data, columns_per_row)
    out.write(colorize_dump(text, style) if color else text)
    out.flush()
