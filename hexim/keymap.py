"""Browsing-mode key bindings.

Arrow keys and vi-style letters move the cursor; single control keys trigger
undo, save and exit. Prompt modes do not consult the keymap.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    EDIT = "edit"
    UNDO = "undo"
    SAVE = "save"
    EXIT = "exit"


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    keys: tuple[str, ...]
    action: Action


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("LEFT", "h", "BACKSPACE"), Action.MOVE_LEFT),
    KeyBinding(("RIGHT", "l"), Action.MOVE_RIGHT),
    KeyBinding(("UP", "k"), Action.MOVE_UP),
    KeyBinding(("DOWN", "j"), Action.MOVE_DOWN),
    KeyBinding(("i",), Action.EDIT),
    KeyBinding(("CTRL_Z",), Action.UNDO),
    KeyBinding(("CTRL_O",), Action.SAVE),
    KeyBinding(("CTRL_Q",), Action.EXIT),
)


class Keymap:
    """Key-token lookup table; later bindings override earlier ones."""

    def __init__(self, bindings: tuple[KeyBinding, ...] = DEFAULT_BINDINGS) -> None:
        self._actions: dict[str, Action] = {}
        for binding in bindings:
            for key in binding.keys:
                self._actions[key] = binding.action

    def action_for(self, key: str) -> Action | None:
        return self._actions.get(key)
