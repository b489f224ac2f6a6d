"""Line editor key handling.

The input line is a plain ``str`` and the caret is an index into it. Python
strings index by code point, so moving or deleting "one character" is always
one index step regardless of how many UTF-8 bytes the character needs.

Key events are strings: either a :class:`Key` member for editing keys or a
single printable character. Anything else is ignored.
"""

from dataclasses import replace
from enum import StrEnum, auto

from inventory_tui.app_state import AppState
from inventory_tui.dispatch import dispatch

KeyEvent = str


class Key(StrEnum):
    """Named editing keys produced by the key decoder."""

    ENTER = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    BACKSPACE = auto()
    ESCAPE = auto()
    UP = auto()
    DOWN = auto()


def handle_key(state: AppState, key: KeyEvent) -> AppState:
    """Apply one key event and return the next state."""
    if key == Key.ENTER:
        return submit(state)
    if key == Key.LEFT:
        return move_caret(state, state.caret - 1)
    if key == Key.RIGHT:
        return move_caret(state, state.caret + 1)
    if key == Key.HOME:
        return move_caret(state, 0)
    if key == Key.END:
        return move_caret(state, len(state.input_text))
    if key == Key.BACKSPACE:
        return backspace(state)
    if key == Key.ESCAPE:
        return _set_line(state, "", 0)
    if key == Key.UP:
        return recall(state, -1)
    if key == Key.DOWN:
        return recall(state, 1)
    if len(key) == 1 and key.isprintable():
        return insert(state, key)
    return state


def _set_line(state: AppState, text: str, caret: int) -> AppState:
    return replace(state, input_text=text, caret=caret, needs_redraw=True)


def insert(state: AppState, text: str) -> AppState:
    """Insert ``text`` at the caret and move the caret past it."""
    line = state.input_text
    caret = state.caret
    return _set_line(state, line[:caret] + text + line[caret:], caret + len(text))


def backspace(state: AppState) -> AppState:
    """Delete the code point before the caret."""
    if state.caret == 0:
        return state
    line = state.input_text
    caret = state.caret
    return _set_line(state, line[: caret - 1] + line[caret:], caret - 1)


def move_caret(state: AppState, caret: int) -> AppState:
    """Move the caret, clamped to ``[0, len(input_text)]``."""
    caret = max(0, min(caret, len(state.input_text)))
    if caret == state.caret:
        return state
    return replace(state, caret=caret, needs_redraw=True)


def recall(state: AppState, direction: int) -> AppState:
    """Step through the recall history, wrapping at both ends.

    Up (``direction=-1``) starts from the newest entry, Down (``+1``) from the
    oldest. The selected entry replaces the line with the caret at its end.
    """
    if not state.history:
        return state
    size = len(state.history)
    if state.history_cursor is None:
        cursor = size - 1 if direction < 0 else 0
    else:
        cursor = (state.history_cursor + direction) % size
    entry = state.history[cursor]
    return replace(_set_line(state, entry, len(entry)), history_cursor=cursor)


def submit(state: AppState) -> AppState:
    """Hand the current line to the dispatcher and start a fresh one."""
    line = state.input_text
    state = replace(_set_line(state, "", 0), history_cursor=None)
    return dispatch(state, line)
