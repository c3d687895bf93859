"""Whole-file load and save helpers.

Loading is all-or-nothing: the complete file is read into memory at once.
Saving writes to a sibling temporary file and renames it over the target so a
failed write never leaves a half-written destination behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .errors import LoadError, SaveError

logger = logging.getLogger(__name__)


def load_bytes(path: Path) -> bytes:
    """Read ``path`` fully, raising ``LoadError`` on any OS failure."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise LoadError(f"{path}: {exc.strerror or exc}") from exc
    logger.debug("loaded %d bytes from %s", len(data), path)
    return data


def write_bytes(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data``.

    Raises ``SaveError`` carrying the OS reason when the directory is missing,
    not writable, or the rename fails. The destination is untouched on error.
    """
    target = Path(path)
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            os.chmod(tmp_name, target.stat().st_mode & 0o7777)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as exc:
        raise SaveError(str(path), exc.strerror or str(exc)) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.debug("could not remove temporary file %s", tmp_name)
    logger.info("wrote %d bytes to %s", len(data), target)
