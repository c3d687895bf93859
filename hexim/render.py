"""Frame construction and ANSI composition for the hex grid.

``build_frame`` is a pure projection of buffer, layout, cursor and history
into a ``Frame`` value: it decides which highlight applies to each cell but
knows nothing about escape codes. ``compose_frame`` turns a frame into one
ANSI string using a ``HexTheme``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .buffer import ByteBuffer
from .cursor import CursorModel
from .history import EditHistory
from .layout import Layout
from .theme import HexTheme

PADDING_TEXT = "--"
NO_OFFSET_TEXT = "--------"
READ_ONLY_MARKER = " [read-only]"


class CellHighlight(Enum):
    CURSOR = "cursor"
    CURSOR_PADDING = "cursor_padding"
    PADDING = "padding"
    MODIFIED = "modified"
    PLAIN = "plain"


@dataclass(frozen=True)
class Cell:
    text: str
    highlight: CellHighlight


@dataclass(frozen=True)
class FrameRow:
    offset: int
    cells: tuple[Cell, ...]

    @property
    def label(self) -> str:
        return f"{self.offset:08X} |"

    def plain_text(self) -> str:
        return self.label + "".join(f" {cell.text}" for cell in self.cells)


@dataclass(frozen=True)
class Frame:
    rows: tuple[FrameRow, ...]
    status: str
    message: str = ""
    prompt: str | None = None


def cell_highlight(index: int, buffer_length: int, active: bool, edited: frozenset[int]) -> CellHighlight:
    """Pick the single highlight class for grid index ``index``."""
    if index >= buffer_length:
        return CellHighlight.CURSOR_PADDING if active else CellHighlight.PADDING
    if active:
        return CellHighlight.CURSOR
    if index in edited:
        return CellHighlight.MODIFIED
    return CellHighlight.PLAIN


def format_status_line(buffer: ByteBuffer, layout: Layout, cursor: CursorModel) -> str:
    offset_text = NO_OFFSET_TEXT if cursor.byte_index is None else f"{cursor.byte_index:08X}"
    status = (
        f"{offset_text} ({cursor.logical_column},{cursor.screen_y}) "
        f"line-count={layout.total_rows} Filename: {buffer.display_name}"
    )
    if buffer.read_only:
        status += READ_ONLY_MARKER
    return status


def build_frame(
    buffer: ByteBuffer,
    layout: Layout,
    cursor: CursorModel,
    history: EditHistory,
    *,
    message: str = "",
    prompt: str | None = None,
) -> Frame:
    """Project current session state into a frame. Never mutates its inputs."""
    length = len(buffer)
    columns = layout.columns_per_row
    edited = history.edited_offsets()
    first_row = cursor.scroll_top
    last_row = min(cursor.scroll_top + layout.visible_rows, layout.total_rows)

    rows: list[FrameRow] = []
    for row in range(first_row, last_row):
        row_start = row * columns
        cells: list[Cell] = []
        for index in range(row_start, row_start + columns):
            highlight = cell_highlight(index, length, cursor.is_active(index), edited)
            text = PADDING_TEXT if index >= length else f"{buffer[index]:02X}"
            cells.append(Cell(text, highlight))
        rows.append(FrameRow(row_start, tuple(cells)))

    return Frame(
        rows=tuple(rows),
        status=format_status_line(buffer, layout, cursor),
        message=message,
        prompt=prompt,
    )


def _clip(text: str, width: int) -> str:
    return text[: max(1, width - 1)]


def _clip_tail(text: str, width: int) -> str:
    return text[-max(1, width - 1) :]


def _styled(text: str, style: str, reset: str) -> str:
    if not style:
        return text
    return f"{style}{text}{reset}"


def _cell_style(theme: HexTheme, highlight: CellHighlight) -> str:
    return {
        CellHighlight.CURSOR: theme.cursor,
        CellHighlight.CURSOR_PADDING: theme.cursor_padding,
        CellHighlight.PADDING: theme.padding,
        CellHighlight.MODIFIED: theme.modified,
        CellHighlight.PLAIN: theme.plain,
    }[highlight]


def compose_frame(frame: Frame, layout: Layout, theme: HexTheme) -> str:
    """Compose a full-screen ANSI frame.

    Grid rows start at the top of the screen, the status line sits on the
    second-to-last terminal row and the message (or active prompt) on the last.
    When a prompt is active the terminal cursor is left at its end; a prompt
    wider than the terminal shows its tail so typing stays visible.
    """
    out: list[str] = ["\033[H\033[J"]
    for row in frame.rows:
        out.append(_styled(row.label, theme.offset_label, theme.reset))
        for cell in row.cells:
            out.append(" ")
            out.append(_styled(cell.text, _cell_style(theme, cell.highlight), theme.reset))
        out.append("\r\n")

    status_row = max(1, layout.terminal_height - 1)
    bottom_row = max(1, layout.terminal_height)
    out.append(f"\033[{status_row};1H")
    out.append(_styled(_clip(frame.status, layout.terminal_width), theme.status, theme.reset))
    out.append(f"\033[{bottom_row};1H\033[2K")
    if frame.prompt is not None:
        prompt_text = _clip_tail(frame.prompt, layout.terminal_width)
        out.append(_styled(prompt_text, theme.prompt, theme.reset))
        out.append(f"\033[{bottom_row};{len(prompt_text) + 1}H")
    elif frame.message:
        out.append(_styled(_clip(frame.message, layout.terminal_width), theme.message, theme.reset))
    return "".join(out)


def dump_lines(data: bytes, columns_per_row: int) -> list[str]:
    """Render every row of ``data`` as plain grid text, padding the last row."""
    lines: list[str] = []
    length = len(data)
    for row_start in range(0, length, columns_per_row):
        cells = []
        for index in range(row_start, row_start + columns_per_row):
            cells.append(f" {data[index]:02X}" if index < length else f" {PADDING_TEXT}")
        lines.append(f"{row_start:08X} |" + "".join(cells))
    return lines
