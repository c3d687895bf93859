"""Grid geometry for the hex view.

Each byte cell takes three screen columns (a space plus two hex digits). Rows
start with a ten-column prefix: the 8-digit offset label, a space and ``|``.
Geometry is sampled once when the session starts and never reflowed.
"""

from __future__ import annotations

from dataclasses import dataclass

CELL_WIDTH = 3
OFFSET_PREFIX_WIDTH = 10
# Screen column (1-based) of the first hex digit of the first cell.
FIRST_CELL_X = OFFSET_PREFIX_WIDTH + 2
# Status line, message/prompt line and one row of margin.
RESERVED_ROWS = 3


@dataclass(frozen=True)
class Layout:
    terminal_width: int
    terminal_height: int
    columns_per_row: int
    total_rows: int
    visible_rows: int

    @property
    def max_scroll_top(self) -> int:
        return max(0, self.total_rows - self.visible_rows)

    @property
    def last_cell_x(self) -> int:
        """Screen column of the last cell in a row."""
        return FIRST_CELL_X + (self.columns_per_row - 1) * CELL_WIDTH


def columns_for_width(terminal_width: int) -> int:
    return max(1, (terminal_width - OFFSET_PREFIX_WIDTH) // CELL_WIDTH)


def rows_for_length(buffer_length: int, columns_per_row: int) -> int:
    return (buffer_length + columns_per_row - 1) // columns_per_row


def compute_layout(terminal_width: int, terminal_height: int, buffer_length: int) -> Layout:
    columns = columns_for_width(terminal_width)
    return Layout(
        terminal_width=terminal_width,
        terminal_height=terminal_height,
        columns_per_row=columns,
        total_rows=rows_for_length(buffer_length, columns),
        visible_rows=max(1, terminal_height - RESERVED_ROWS),
    )
