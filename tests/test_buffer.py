"""Byte buffer, whole-file loading and atomic save tests."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hexim.buffer import UNTITLED_NAME, ByteBuffer
from hexim.errors import LoadError, SaveError
from hexim.fileio import write_bytes


class ByteBufferTests(unittest.TestCase):
    def test_fresh_buffer_is_clean(self) -> None:
        buffer = ByteBuffer.from_bytes(b"\x00\x01\x02", "demo.bin")
        self.assertFalse(buffer.is_dirty)
        self.assertEqual(len(buffer), 3)
        self.assertEqual(buffer[1], 1)

    def test_create_is_zero_filled_and_untitled(self) -> None:
        buffer = ByteBuffer.create(5)
        self.assertEqual(bytes(buffer.working), bytes(5))
        self.assertEqual(buffer.display_name, UNTITLED_NAME)
        self.assertFalse(buffer.is_dirty)
        self.assertEqual(len(ByteBuffer.create(0)), 0)

    def test_create_rejects_negative_length(self) -> None:
        with self.assertRaises(ValueError):
            ByteBuffer.create(-1)

    def test_set_byte_makes_dirty_and_restoring_makes_clean(self) -> None:
        buffer = ByteBuffer.from_bytes(b"\x10\x20", "demo.bin")
        buffer.set_byte(1, 0xFF)
        self.assertTrue(buffer.is_dirty)
        self.assertEqual(buffer.baseline, b"\x10\x20")
        buffer.set_byte(1, 0x20)
        self.assertFalse(buffer.is_dirty)

    def test_set_byte_never_resizes(self) -> None:
        buffer = ByteBuffer.from_bytes(b"\x10\x20", "demo.bin")
        with self.assertRaises(IndexError):
            buffer.set_byte(2, 1)
        with self.assertRaises(IndexError):
            buffer.set_byte(-1, 1)
        self.assertEqual(len(buffer), 2)

    def test_load_reads_whole_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.bin"
            path.write_bytes(bytes(range(256)))
            buffer = ByteBuffer.load(path, read_only=True)

        self.assertEqual(bytes(buffer.working), bytes(range(256)))
        self.assertEqual(buffer.display_name, str(path))
        self.assertTrue(buffer.read_only)

    def test_load_missing_file_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(LoadError):
                ByteBuffer.load(Path(tmp) / "missing.bin")
            with self.assertRaises(LoadError):
                ByteBuffer.load(Path(tmp))

    def test_save_as_writes_and_adopts_baseline(self) -> None:
        buffer = ByteBuffer.from_bytes(b"\x00\x01", "demo.bin")
        buffer.set_byte(0, 0xAB)
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.bin"
            buffer.save_as(str(target))
            self.assertEqual(target.read_bytes(), b"\xab\x01")
            self.assertEqual(os.listdir(tmp), ["out.bin"])

        self.assertFalse(buffer.is_dirty)
        self.assertEqual(buffer.baseline, b"\xab\x01")
        self.assertEqual(buffer.display_name, str(target))

    def test_save_as_failure_leaves_buffer_untouched(self) -> None:
        buffer = ByteBuffer.from_bytes(b"\x00\x01", "demo.bin")
        buffer.set_byte(1, 0x7F)
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "no-such-dir" / "out.bin"
            with self.assertRaises(SaveError) as ctx:
                buffer.save_as(str(target))

        self.assertEqual(ctx.exception.path, str(target))
        self.assertTrue(buffer.is_dirty)
        self.assertEqual(buffer.baseline, b"\x00\x01")
        self.assertEqual(buffer.display_name, "demo.bin")


class WriteBytesTests(unittest.TestCase):
    def test_overwrite_keeps_existing_permissions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "exec.bin"
            target.write_bytes(b"old")
            os.chmod(target, 0o751)
            write_bytes(target, b"new")

            self.assertEqual(target.read_bytes(), b"new")
            self.assertEqual(target.stat().st_mode & 0o777, 0o751)

    def test_failed_rename_removes_temporary_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.bin"
            with mock.patch("hexim.fileio.os.replace", side_effect=PermissionError(13, "Permission denied")):
                with self.assertRaises(SaveError) as ctx:
                    write_bytes(target, b"data")

            self.assertEqual(ctx.exception.reason, "Permission denied")
            self.assertEqual(os.listdir(tmp), [])


if __name__ == "__main__":
    unittest.main()
