"""Application state.

:class:`AppState` is the one explicit state object of the interactive
session. It is created on the main thread, handed by value to every key and
command handler, and replaced (never mutated) by what they return. Background
threads never see it.

Two flags drive the loop:

* ``needs_redraw`` is raised by anything that changes what is on screen (line
    edits, view switches, terminal resizes, command output) and lowered by
    :func:`mark_rendered` right after a frame is painted.
* ``dirty`` is raised by successful inventory mutations and lowered by a
    successful save. ``:q`` refuses to quit while it is set.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from pyrsistent import PVector, pvector

from inventory_tui.inventory import Inventory
from inventory_tui.types import SaveFn, View


def _discard(_: Inventory) -> None:
    return None


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of the interactive session.

    Attributes:
        inventory (Inventory): Current inventory aggregate.
        save_fn (SaveFn): Persists an inventory; raises ``PersistenceError``.
        input_text (str): Line being edited.
        caret (int): Caret position in code points, ``0 <= caret <= len(input_text)``.
        view (View): Panel shown above the input line.
        messages (str): Message pane contents.
        history (PVector[str]): Recall history, oldest first.
        history_cursor (int | None): Selected history entry, None when not browsing.
        needs_redraw (bool): A frame must be painted.
        dirty (bool): Inventory has unsaved mutations.
        running (bool): False once a quit command succeeded.
        terminal_size (tuple[int, int] | None): Last seen (columns, rows).
    """

    inventory: Inventory = Inventory()
    save_fn: SaveFn = _discard

    # Input line
    input_text: str = ""
    caret: int = 0

    # Views
    view: View = View.MESSAGES
    messages: str = ""

    # Recall
    history: PVector[str] = pvector()
    history_cursor: Optional[int] = None

    # Flags
    needs_redraw: bool = True
    dirty: bool = False
    running: bool = True

    terminal_size: Optional[Tuple[int, int]] = None


def new_app_state(
    inventory: Inventory,
    save_fn: SaveFn,
    history_templates: Iterable[str] = (),
    banner: Optional[str] = None,
) -> AppState:
    """Return the initial state with the recall history seeded."""
    state = AppState(
        inventory=inventory,
        save_fn=save_fn,
        history=pvector(history_templates),
    )
    if banner:
        state = write_message(state, banner)
    return state


def write_message(state: AppState, line: str) -> AppState:
    """Append one line to the message pane."""
    return replace(state, messages=state.messages + line + "\n", needs_redraw=True)


def clear_messages(state: AppState) -> AppState:
    return replace(state, messages="", needs_redraw=True)


def set_view(state: AppState, view: View) -> AppState:
    return replace(state, view=view, needs_redraw=True)


def remember(state: AppState, line: str) -> AppState:
    """Append ``line`` to the recall history and stop browsing."""
    return replace(state, history=state.history.append(line), history_cursor=None)


def observe_terminal_size(state: AppState, size: Tuple[int, int]) -> AppState:
    """Record the terminal size, requesting a redraw when it changed."""
    if size == state.terminal_size:
        return state
    return replace(state, terminal_size=size, needs_redraw=True)


def mark_rendered(state: AppState) -> AppState:
    return replace(state, needs_redraw=False)
