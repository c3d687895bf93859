"""Error kinds raised by the editor core and its I/O collaborators.

Only ``ConfigurationError`` and ``LoadError`` are fatal; they surface before
the interactive session starts. Everything else is recovered where it occurs
and reported on the session message line.
"""

from __future__ import annotations


class HexEditorError(Exception):
    """Base class for all editor errors."""


class ConfigurationError(HexEditorError):
    """No usable input source was given on the command line."""


class LoadError(HexEditorError):
    """The requested file could not be read."""


class TerminalUnavailable(HexEditorError):
    """Terminal is missing or its size could not be queried."""


class InvalidHexInput(HexEditorError):
    """Edit prompt text is not a valid hexadecimal byte."""

    def __init__(self, text: str) -> None:
        super().__init__(f"invalid hexadecimal input: {text!r}")
        self.text = text


class SaveError(HexEditorError):
    """Writing the buffer to disk failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ReadOnlyError(HexEditorError):
    """A mutating request was made on a read-only session."""


class NoAddressableByte(HexEditorError):
    """The cursor sits on a padding cell past the end of the buffer."""
