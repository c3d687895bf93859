"""Byte buffer owned by the editing session.

Holds the mutable working copy, the baseline snapshot used for dirty checks,
and the name shown in the status line. Edits mutate in place; the length is
fixed for the lifetime of the buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .fileio import load_bytes, write_bytes

UNTITLED_NAME = "untitled.txt"


@dataclass
class ByteBuffer:
    working: bytearray
    baseline: bytes
    display_name: str
    read_only: bool = False

    @classmethod
    def from_bytes(cls, data: bytes, display_name: str, read_only: bool = False) -> ByteBuffer:
        """Build a clean buffer whose baseline equals ``data``."""
        return cls(
            working=bytearray(data),
            baseline=bytes(data),
            display_name=display_name,
            read_only=read_only,
        )

    @classmethod
    def create(cls, length: int, read_only: bool = False) -> ByteBuffer:
        """Build a zero-filled, clean, untitled buffer of ``length`` bytes."""
        if length < 0:
            raise ValueError("buffer length must be >= 0")
        return cls.from_bytes(bytes(length), UNTITLED_NAME, read_only=read_only)

    @classmethod
    def load(cls, path: Path, read_only: bool = False) -> ByteBuffer:
        """Load ``path`` in one read. Propagates ``LoadError``."""
        return cls.from_bytes(load_bytes(Path(path)), str(path), read_only=read_only)

    def __len__(self) -> int:
        return len(self.working)

    def __getitem__(self, offset: int) -> int:
        return self.working[offset]

    def set_byte(self, offset: int, value: int) -> None:
        if not 0 <= offset < len(self.working):
            raise IndexError(f"offset {offset} outside buffer of length {len(self.working)}")
        self.working[offset] = value

    @property
    def is_dirty(self) -> bool:
        return self.working != self.baseline

    def save_as(self, path: str) -> None:
        """Write the working copy to ``path`` and adopt it as the new baseline.

        On ``SaveError`` nothing about the buffer changes.
        """
        snapshot = bytes(self.working)
        write_bytes(Path(path), snapshot)
        self.baseline = snapshot
        self.display_name = path
