"""Interactive session runtime.

Samples the terminal size once, builds the session controller, and runs the
blocking read/dispatch/redraw loop inside raw mode until the controller
terminates. Feature logic lives in ``session``; this module is wiring.
"""

from __future__ import annotations

import logging
import sys

from .buffer import ByteBuffer
from .input import read_key
from .layout import compute_layout
from .render import Frame, compose_frame
from .session import SessionController
from .terminal import FALLBACK_SIZE, TerminalController
from .theme import DEFAULT_THEME, HexTheme

logger = logging.getLogger(__name__)


def run_event_loop(
    controller: SessionController,
    terminal: TerminalController,
    stdin_fd: int,
    theme: HexTheme,
) -> None:
    """Redraw on change, block for a key, dispatch it; repeat until terminated.

    The terminal is restored on every way out of the loop, including errors.
    """
    last_frame: Frame | None = None
    skip_next_lf = False
    input_closed = False
    with terminal.raw_mode():
        while not controller.terminated:
            frame = controller.frame()
            if frame != last_frame:
                terminal.set_cursor_visible(frame.prompt is not None)
                terminal.write(compose_frame(frame, controller.layout, theme))
                last_frame = frame

            try:
                key = read_key(stdin_fd)
            except KeyboardInterrupt:
                continue
            if key == "":
                input_closed = True
                break
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"
            if key in {"ENTER_CR", "ENTER_LF"}:
                key = "ENTER"
            controller.handle_key(key)
    if input_closed:
        logger.warning("input closed; ending session")


def run_session(
    buffer: ByteBuffer,
    *,
    theme: HexTheme = DEFAULT_THEME,
    fallback_size: tuple[int, int] = FALLBACK_SIZE,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> SessionController:
    """Run an interactive editing session on ``buffer`` and return its controller."""
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    columns, lines = terminal.size(fallback_size)
    layout = compute_layout(columns, lines, len(buffer))
    logger.debug(
        "session layout: %d columns per row, %d rows, %d visible",
        layout.columns_per_row,
        layout.total_rows,
        layout.visible_rows,
    )
    controller = SessionController(buffer, layout)
    run_event_loop(controller, terminal, stdin_fd, theme)
    return controller
