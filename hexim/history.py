"""Append-only log of byte edits with pop-and-restore undo."""

from __future__ import annotations

from typing import NamedTuple

from .buffer import ByteBuffer


class EditRecord(NamedTuple):
    offset: int
    previous_value: int


class EditHistory:
    def __init__(self) -> None:
        self._records: list[EditRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    @property
    def records(self) -> tuple[EditRecord, ...]:
        return tuple(self._records)

    def push(self, offset: int, previous_value: int) -> None:
        self._records.append(EditRecord(offset, previous_value))

    def pop_and_restore(self, buffer: ByteBuffer) -> int | None:
        """Undo the most recent edit and return its offset.

        Returns ``None`` when there is nothing to undo. Only the working copy
        is written; the baseline stays as it was.
        """
        if not self._records:
            return None
        record = self._records.pop()
        buffer.set_byte(record.offset, record.previous_value)
        return record.offset

    def edited_offsets(self) -> frozenset[int]:
        return frozenset(record.offset for record in self._records)
