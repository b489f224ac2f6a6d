from dataclasses import replace

from pyrsistent import pvector

from inventory_tui.app_state import mark_rendered
from inventory_tui.commands import HISTORY_TEMPLATES
from inventory_tui.editor import Key, handle_key
from tests.test_utils import make_app_state, submit_line, type_text


def test_typing_then_backspace_twice() -> None:
    state = type_text(make_app_state(), "hello")
    state = handle_key(state, Key.BACKSPACE)
    state = handle_key(state, Key.BACKSPACE)
    assert state.input_text == "hel"
    assert state.caret == 3


def test_insert_at_caret() -> None:
    state = type_text(make_app_state(), "hllo")
    state = handle_key(state, Key.HOME)
    state = handle_key(state, Key.RIGHT)
    state = handle_key(state, "e")
    assert state.input_text == "hello"
    assert state.caret == 2


def test_caret_moves_by_code_point() -> None:
    state = type_text(make_app_state(), "aé✓😀")
    assert state.caret == 4
    state = handle_key(state, Key.LEFT)
    state = handle_key(state, Key.BACKSPACE)
    assert state.input_text == "aé😀"
    assert state.caret == 2


def test_caret_is_clamped() -> None:
    state = type_text(make_app_state(), "ab")
    state = handle_key(state, Key.RIGHT)
    assert state.caret == 2
    for _ in range(5):
        state = handle_key(state, Key.LEFT)
    assert state.caret == 0
    state = handle_key(state, Key.BACKSPACE)
    assert state.input_text == "ab"
    state = handle_key(state, Key.END)
    assert state.caret == 2


def test_escape_clears_line() -> None:
    state = handle_key(type_text(make_app_state(), "garbage"), Key.ESCAPE)
    assert state.input_text == ""
    assert state.caret == 0


def test_edits_request_redraw() -> None:
    state = mark_rendered(make_app_state())
    assert not state.needs_redraw
    assert handle_key(state, "x").needs_redraw


def test_unknown_keys_are_ignored() -> None:
    state = mark_rendered(make_app_state())
    assert handle_key(state, "\x01") == state
    assert handle_key(state, "pgup") == state


def test_history_up_starts_from_newest_and_wraps() -> None:
    state = make_app_state()
    state = handle_key(state, Key.UP)
    assert state.input_text == HISTORY_TEMPLATES[-1]
    assert state.caret == len(HISTORY_TEMPLATES[-1])
    for _ in range(len(HISTORY_TEMPLATES) - 1):
        state = handle_key(state, Key.UP)
    assert state.input_text == HISTORY_TEMPLATES[0]
    state = handle_key(state, Key.UP)
    assert state.input_text == HISTORY_TEMPLATES[-1]


def test_history_down_starts_from_oldest() -> None:
    state = handle_key(make_app_state(), Key.DOWN)
    assert state.input_text == HISTORY_TEMPLATES[0]
    state = handle_key(state, Key.DOWN)
    assert state.input_text == HISTORY_TEMPLATES[1]


def test_history_empty_is_noop() -> None:
    state = replace(make_app_state(), history=pvector())
    assert handle_key(state, Key.UP) == state


def test_enter_dispatches_and_clears() -> None:
    state = submit_line(make_app_state(), ':acomp "Garage North"')
    assert state.input_text == ""
    assert state.caret == 0
    assert state.inventory.compartments[0].name == "Garage North"
    state = handle_key(state, Key.UP)
    assert state.input_text == ':acomp "Garage North"'
