"""Cursor position, screen-to-offset mapping and the scroll window.

The cursor lives in screen coordinates: ``screen_x`` is the 1-based column of
the first hex digit of the active cell and ``screen_y`` is the 1-based grid
row (not the terminal row; the terminal row is ``screen_y - scroll_top``).
``byte_index`` is ``None`` whenever the cell lies past the end of the buffer.
"""

from __future__ import annotations

from .layout import CELL_WIDTH, FIRST_CELL_X, Layout


class CursorModel:
    """Cell cursor with clamped movement and a derived byte offset."""

    def __init__(self, layout: Layout, buffer_length: int) -> None:
        self.layout = layout
        self.buffer_length = buffer_length
        self.screen_x = FIRST_CELL_X
        self.screen_y = 1
        self.scroll_top = 0
        self.byte_index: int | None = None
        self._refresh_byte_index()

    @property
    def column(self) -> int:
        """Zero-based column index of the active cell."""
        return (self.screen_x - FIRST_CELL_X) // CELL_WIDTH

    @property
    def logical_column(self) -> int:
        """One-based column shown in the status line."""
        return (self.screen_x - 9) // CELL_WIDTH

    def offset_for_cell(self, row: int, column: int) -> int | None:
        """Map a zero-based grid cell to its byte offset, or ``None`` for padding."""
        index = row * self.layout.columns_per_row + column
        if index >= self.buffer_length:
            return None
        return index

    def cell_for_offset(self, offset: int) -> tuple[int, int]:
        """Inverse of ``offset_for_cell`` for in-range offsets."""
        if not 0 <= offset < self.buffer_length:
            raise IndexError(f"offset {offset} outside buffer of length {self.buffer_length}")
        return divmod(offset, self.layout.columns_per_row)

    def screen_position_for_offset(self, offset: int) -> tuple[int, int]:
        row, column = self.cell_for_offset(offset)
        return FIRST_CELL_X + column * CELL_WIDTH, row + 1

    def is_active(self, index: int) -> bool:
        """Return whether grid index ``index`` is the cell under the cursor.

        Unlike ``byte_index`` this also matches padding cells.
        """
        return index == (self.screen_y - 1) * self.layout.columns_per_row + self.column

    def move_left(self) -> None:
        if self.screen_x > FIRST_CELL_X:
            self.screen_x -= CELL_WIDTH
        self._refresh_byte_index()

    def move_right(self) -> None:
        if self.screen_x < self.layout.last_cell_x:
            self.screen_x += CELL_WIDTH
        self._refresh_byte_index()

    def move_down(self) -> None:
        if self.screen_y < self.layout.total_rows:
            self.screen_y += 1
        if (
            self.screen_y > self.scroll_top + self.layout.visible_rows
            and self.scroll_top < self.layout.max_scroll_top
        ):
            self.scroll_top += 1
        self._refresh_byte_index()

    def move_up(self) -> None:
        if self.screen_y > 1:
            self.screen_y -= 1
        if self.screen_y < self.scroll_top + 1:
            self.scroll_top = self.screen_y - 1
        self._refresh_byte_index()

    def _refresh_byte_index(self) -> None:
        self.byte_index = self.offset_for_cell(self.screen_y - 1, self.column)
