"""Session state machine for the interactive editor.

The controller owns the buffer, cursor and edit history and consumes one
decoded key token at a time. Prompts (edit value, save path, exit
confirmation) are explicit sub-states holding their own line text, so
submitting or cancelling a prompt is an ordinary transition rather than a
nested read loop. Nothing here touches the terminal.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .buffer import ByteBuffer
from .cursor import CursorModel
from .errors import HexEditorError, InvalidHexInput, NoAddressableByte, ReadOnlyError, SaveError
from .history import EditHistory
from .keymap import Action, Keymap
from .layout import Layout
from .render import Frame, build_frame

logger = logging.getLogger(__name__)

EDIT_READ_ONLY_MESSAGE = "Unable to edit! File is opened in Read-Only Mode"
EDIT_UNAVAILABLE_MESSAGE = "Unable to edit current cell! Address is unavailable"
SAVE_READ_ONLY_MESSAGE = "Unable to save! File is opened in Read-Only Mode"
INVALID_HEX_MESSAGE = "Invalid hexadecimal input!"
NOTHING_TO_UNDO_MESSAGE = "Nothing to undo"
EXIT_CANCELLED_MESSAGE = "Exit cancelled."
SAVE_PROMPT_LABEL = "Output file: "
EXIT_PROMPT_LABEL = "Unsaved changes! Quit anyway? (y/N): "
CANCEL_KEYS = frozenset({"ESC", "CTRL_C"})
CONFIRM_ANSWERS = frozenset({"y", "yes"})


class Mode(Enum):
    BROWSING = "browsing"
    LINE_INPUT = "line_input"
    CONFIRM_EXIT = "confirm_exit"
    TERMINATED = "terminated"


class PromptPurpose(Enum):
    EDIT = "edit"
    SAVE = "save"
    EXIT = "exit"


_CANCEL_MESSAGES: dict[PromptPurpose, str] = {
    PromptPurpose.EDIT: "Edit cancelled.",
    PromptPurpose.SAVE: "File saving canceled.",
    PromptPurpose.EXIT: EXIT_CANCELLED_MESSAGE,
}


@dataclass
class LinePrompt:
    """Editable single-line prompt.

    While ``pristine`` is set the text is still the prefill, and the first
    typed character replaces it instead of appending.
    """

    purpose: PromptPurpose
    label: str
    text: str = ""
    offset: int | None = None
    pristine: bool = True

    def display(self) -> str:
        return self.label + self.text

    def insert(self, char: str) -> None:
        if self.pristine:
            self.text = ""
        self.pristine = False
        self.text += char

    def backspace(self) -> None:
        self.pristine = False
        self.text = self.text[:-1]


def parse_hex_byte(text: str) -> int:
    """Parse one or two hex digits (surrounding whitespace ignored) into a byte."""
    candidate = text.strip()
    if not 1 <= len(candidate) <= 2 or any(ch not in string.hexdigits for ch in candidate):
        raise InvalidHexInput(text)
    return int(candidate, 16)


class SessionController:
    """Top-level editor state machine driven by key tokens."""

    def __init__(
        self,
        buffer: ByteBuffer,
        layout: Layout,
        *,
        keymap: Keymap | None = None,
    ) -> None:
        self.buffer = buffer
        self.layout = layout
        self.cursor = CursorModel(layout, len(buffer))
        self.history = EditHistory()
        self.keymap = keymap if keymap is not None else Keymap()
        self.mode = Mode.BROWSING
        self.prompt: LinePrompt | None = None
        self.message = ""
        self.last_error: HexEditorError | None = None
        self._actions: dict[Action, Callable[[], None]] = {
            Action.MOVE_LEFT: self.cursor.move_left,
            Action.MOVE_RIGHT: self.cursor.move_right,
            Action.MOVE_UP: self.cursor.move_up,
            Action.MOVE_DOWN: self.cursor.move_down,
            Action.EDIT: self.request_edit,
            Action.UNDO: self.undo,
            Action.SAVE: self.request_save,
            Action.EXIT: self.request_exit,
        }

    @property
    def terminated(self) -> bool:
        return self.mode is Mode.TERMINATED

    def frame(self) -> Frame:
        return build_frame(
            self.buffer,
            self.layout,
            self.cursor,
            self.history,
            message=self.message,
            prompt=self.prompt.display() if self.prompt is not None else None,
        )

    def handle_key(self, key: str) -> None:
        """Feed one key token to whichever mode is active."""
        if self.mode is Mode.TERMINATED:
            return
        self.last_error = None
        if self.mode is Mode.BROWSING:
            action = self.keymap.action_for(key)
            if action is None:
                return
            self.message = ""
            self._actions[action]()
            return
        self._handle_prompt_key(key)

    # Browsing-mode requests.

    def request_edit(self) -> None:
        if self.buffer.read_only:
            self._reject(ReadOnlyError("edit"), EDIT_READ_ONLY_MESSAGE)
            return
        offset = self.cursor.byte_index
        if offset is None:
            self._reject(NoAddressableByte("edit"), EDIT_UNAVAILABLE_MESSAGE)
            return
        self._open_prompt(
            LinePrompt(
                purpose=PromptPurpose.EDIT,
                label=f"New value for 0x{offset:08X}: ",
                text=f"{self.buffer[offset]:02X}",
                offset=offset,
            ),
            Mode.LINE_INPUT,
        )

    def undo(self) -> None:
        offset = self.history.pop_and_restore(self.buffer)
        if offset is None:
            self.message = NOTHING_TO_UNDO_MESSAGE
            return
        logger.info("undid edit at 0x%08X", offset)
        self.message = f"Undid value of 0x{offset:08X}"

    def request_save(self) -> None:
        if self.buffer.read_only:
            self._reject(ReadOnlyError("save"), SAVE_READ_ONLY_MESSAGE)
            return
        self._open_prompt(
            LinePrompt(
                purpose=PromptPurpose.SAVE,
                label=SAVE_PROMPT_LABEL,
                text=self.buffer.display_name,
            ),
            Mode.LINE_INPUT,
        )

    def request_exit(self) -> None:
        if not self.buffer.is_dirty:
            self.mode = Mode.TERMINATED
            return
        self._open_prompt(
            LinePrompt(purpose=PromptPurpose.EXIT, label=EXIT_PROMPT_LABEL),
            Mode.CONFIRM_EXIT,
        )

    # Prompt completion handlers.

    def apply_edit(self, offset: int, text: str) -> None:
        try:
            value = parse_hex_byte(text)
        except InvalidHexInput as exc:
            self._reject(exc, INVALID_HEX_MESSAGE)
            return
        self.history.push(offset, self.buffer[offset])
        self.buffer.set_byte(offset, value)
        logger.info("set 0x%08X to %02X", offset, value)
        self.message = f"Value of 0x{offset:08X} updated to: {value:02X}"

    def save(self, path: str) -> None:
        try:
            self.buffer.save_as(path)
        except SaveError as exc:
            logger.info("save to %s failed: %s", path, exc.reason)
            self._reject(exc, f"Error saving file: {exc.reason}")
            return
        self.message = f"File saved to: {path}"

    def _open_prompt(self, prompt: LinePrompt, mode: Mode) -> None:
        self.prompt = prompt
        self.mode = mode

    def _close_prompt(self) -> LinePrompt:
        prompt = self.prompt
        assert prompt is not None
        self.prompt = None
        self.mode = Mode.BROWSING
        return prompt

    def _handle_prompt_key(self, key: str) -> None:
        assert self.prompt is not None
        if key in CANCEL_KEYS:
            prompt = self._close_prompt()
            self.message = _CANCEL_MESSAGES[prompt.purpose]
            return
        if key == "ENTER":
            self._submit_prompt()
            return
        if key == "BACKSPACE":
            self.prompt.backspace()
            return
        if len(key) == 1 and key.isprintable():
            self.prompt.insert(key)

    def _submit_prompt(self) -> None:
        prompt = self._close_prompt()
        text = prompt.text.strip()
        if prompt.purpose is PromptPurpose.EXIT:
            if text.lower() in CONFIRM_ANSWERS:
                self.mode = Mode.TERMINATED
            else:
                self.message = EXIT_CANCELLED_MESSAGE
            return
        if not text:
            self.message = _CANCEL_MESSAGES[prompt.purpose]
            return
        if prompt.purpose is PromptPurpose.EDIT:
            assert prompt.offset is not None
            self.apply_edit(prompt.offset, text)
        else:
            self.save(text)

    def _reject(self, error: HexEditorError, message: str) -> None:
        self.last_error = error
        self.message = message
