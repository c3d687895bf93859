"""Terminal control helpers for the editing session.

Owns raw-mode lifecycle, alternate-screen switching and cursor visibility.
Also answers terminal size queries, substituting a fallback geometry when the
size cannot be determined.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalUnavailable

logger = logging.getLogger(__name__)

FALLBACK_SIZE = (80, 24)


def query_terminal_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, lines)`` for ``fd`` or raise ``TerminalUnavailable``."""
    try:
        size = os.get_terminal_size(fd)
    except (OSError, ValueError) as exc:
        raise TerminalUnavailable(str(exc)) from exc
    if size.columns <= 0 or size.lines <= 0:
        raise TerminalUnavailable(f"terminal reported size {size.columns}x{size.lines}")
    return size.columns, size.lines


def terminal_size(fd: int, fallback: tuple[int, int] = FALLBACK_SIZE) -> tuple[int, int]:
    """Return the terminal size, or ``fallback`` when it cannot be queried."""
    try:
        return query_terminal_size(fd)
    except TerminalUnavailable as exc:
        logger.warning("terminal size unavailable (%s); using %dx%d", exc, fallback[0], fallback[1])
        return fallback


class TerminalController:
    """Manage terminal mode transitions for the interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalUnavailable("stdin is not a terminal") from exc
        self._cursor_visible = True

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self._cursor_visible = False

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen and restore tty state."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        self._cursor_visible = True
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def set_cursor_visible(self, visible: bool) -> None:
        """Toggle cursor visibility without changing other terminal state."""
        desired = bool(visible)
        if desired == self._cursor_visible:
            return
        os.write(self.stdout_fd, b"\x1b[?25h" if desired else b"\x1b[?25l")
        self._cursor_visible = desired

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def size(self, fallback: tuple[int, int] = FALLBACK_SIZE) -> tuple[int, int]:
        return terminal_size(self.stdout_fd, fallback)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
