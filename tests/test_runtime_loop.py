from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from hexim.buffer import ByteBuffer
from hexim.layout import compute_layout
from hexim.runtime import run_event_loop, run_session
from hexim.session import SessionController
from hexim.theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self, size: tuple[int, int] = (22, 10)) -> None:
        self.writes: list[str] = []
        self.cursor_visibility: list[bool] = []
        self.raw_mode_entered = 0
        self.raw_mode_exited = 0
        self._size = size

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entered += 1
        try:
            yield
        finally:
            self.raw_mode_exited += 1

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visibility.append(bool(visible))

    def write(self, text: str) -> None:
        self.writes.append(text)

    def size(self, fallback=None) -> tuple[int, int]:
        return self._size


def _controller(data: bytes = bytes(range(4))) -> SessionController:
    buffer = ByteBuffer.from_bytes(data, "demo.bin")
    return SessionController(buffer, compute_layout(22, 10, len(buffer)))


def _keys(*tokens):
    keys = iter(tokens)
    return mock.patch("hexim.runtime.read_key", side_effect=lambda *_args, **_kwargs: next(keys))


class RuntimeLoopBehaviorTests(unittest.TestCase):
    def test_loop_runs_until_controller_terminates(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with _keys("RIGHT", "CTRL_Q"):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertTrue(controller.terminated)
        self.assertEqual(controller.cursor.byte_index, 1)
        self.assertEqual(len(terminal.writes), 2)
        self.assertEqual((terminal.raw_mode_entered, terminal.raw_mode_exited), (1, 1))

    def test_crlf_submits_prompt_once(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with _keys("i", "f", "ENTER_CR", "ENTER_LF", "CTRL_Q", "y", "ENTER_LF"):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertEqual(controller.buffer[0], 0x0F)
        self.assertEqual(len(controller.history), 1)
        self.assertTrue(controller.terminated)

    def test_cursor_is_shown_only_while_prompting(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with _keys("i", "ESC", "CTRL_Q"):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertEqual(terminal.cursor_visibility, [False, True, False])

    def test_unchanged_frames_are_not_rewritten(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with _keys("x", "LEFT", "UP", "CTRL_Q"):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertEqual(len(terminal.writes), 1)

    def test_keyboard_interrupt_is_ignored(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()
        events = iter([KeyboardInterrupt(), "CTRL_Q"])

        def fake_read_key(*_args, **_kwargs):
            event = next(events)
            if isinstance(event, BaseException):
                raise event
            return event

        with mock.patch("hexim.runtime.read_key", side_effect=fake_read_key):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertTrue(controller.terminated)

    def test_end_of_input_stops_loop_and_restores_terminal(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with _keys("i", ""):
            with self.assertLogs("hexim.runtime", level="WARNING"):
                run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertFalse(controller.terminated)
        self.assertEqual(terminal.raw_mode_exited, 1)

    def test_end_of_input_is_logged_after_terminal_restore(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()
        exited_when_logged: list[int] = []

        def record(*_args, **_kwargs) -> None:
            exited_when_logged.append(terminal.raw_mode_exited)

        with _keys(""), mock.patch("hexim.runtime.logger.warning", side_effect=record):
            run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertEqual(exited_when_logged, [1])

    def test_errors_inside_loop_still_restore_terminal(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with mock.patch("hexim.runtime.read_key", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                run_event_loop(controller, terminal, 0, PLAIN_THEME)

        self.assertEqual(terminal.raw_mode_exited, 1)


class RunSessionTests(unittest.TestCase):
    def test_layout_is_sampled_from_terminal_size(self) -> None:
        terminal = _FakeTerminal(size=(40, 12))
        buffer = ByteBuffer.from_bytes(bytes(100), "demo.bin")

        with mock.patch("hexim.runtime.TerminalController", return_value=terminal), _keys("DOWN", "CTRL_Q"):
            controller = run_session(buffer, theme=PLAIN_THEME, stdin_fd=0, stdout_fd=1)

        self.assertEqual(controller.layout.columns_per_row, 10)
        self.assertEqual(controller.layout.total_rows, 10)
        self.assertEqual(controller.layout.visible_rows, 9)
        self.assertEqual(controller.cursor.byte_index, 10)
        self.assertTrue(controller.terminated)


if __name__ == "__main__":
    unittest.main()
