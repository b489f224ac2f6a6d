"""Command reducer.

This module turns one submitted input line into a new
:class:`inventory_tui.app_state.AppState`. The exported :func:`dispatch` is
the only entry point and mirrors the reducer pattern used everywhere else:
it takes a state, returns a new one, and leaves the old one untouched.

Processing order:

1. Tokenize the line (:func:`inventory_tui.tokenizer.tokenize`); an empty line
    is a no-op.
2. Resolve the first token to a :class:`inventory_tui.commands.Verb`. Unknown
    verbs are echoed back to the message pane and nothing else happens.
3. Record the raw line in the recall history.
4. Run the verb handler. Handlers raise :class:`InventoryError` subclasses for
    bad input; those are caught here and reported as one line, so a command
    can never take the session down.

All ``_cmd_*`` helpers are internal and assume the verb was already resolved.
"""

import logging
import re
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence

from inventory_tui.app_state import (
    AppState,
    clear_messages,
    remember,
    set_view,
    write_message,
)
from inventory_tui.commands import HELP_LINES, USAGE, Verb, resolve_verb
from inventory_tui.errors import (
    ArityError,
    InventoryError,
    ParseError,
    PersistenceError,
)
from inventory_tui.inventory import Inventory
from inventory_tui.store import add_compartment, add_container, add_item, add_tag
from inventory_tui.tokenizer import tokenize
from inventory_tui.types import MAX_ENTITY_ID, EntityID, View

logger = logging.getLogger(__name__)

Handler = Callable[[AppState, str, List[str]], AppState]

_ID_PATTERN = re.compile(r"[0-9]+")


def dispatch(state: AppState, line: str) -> AppState:
    """Execute one command line.

    Args:
        state (AppState): Current session state.
        line (str): Raw line as typed (before tokenizing).

    Returns:
        AppState: Next state. Errors are reported in ``messages``; they are
            never raised to the caller.
    """
    tokens = tokenize(line)
    if not tokens:
        return state

    verb_text, args = tokens[0], tokens[1:]
    verb = resolve_verb(verb_text)
    if verb is None:
        return write_message(state, f"no use for {verb_text} and args {' '.join(args)}")

    state = remember(state, line)
    try:
        return _HANDLERS[verb](state, verb_text, args)
    except InventoryError as exc:
        logger.debug("command %r failed: %s", line, exc)
        return write_message(state, f"error: {exc}")


def parse_id(text: str) -> EntityID:
    """Parse an unsigned 32-bit id.

    Raises:
        ParseError: If ``text`` is not made of ASCII digits or is out of range.
    """
    if not _ID_PATTERN.fullmatch(text):
        raise ParseError(text)
    value = int(text)
    if value > MAX_ENTITY_ID:
        raise ParseError(text)
    return value


def _expect(
    verb_text: str, verb: Verb, args: Sequence[str], low: int, high: Optional[int]
) -> None:
    if len(args) < low or (high is not None and len(args) > high):
        raise ArityError(verb_text, USAGE.get(verb, ""))


def _cmd_quit(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.QUIT, args, 0, 0)
    if state.dirty:
        return write_message(
            state, "unsaved changes, use :w to save or :q! to quit without saving"
        )
    return replace(state, running=False)


def _cmd_force_quit(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.FORCE_QUIT, args, 0, 0)
    return replace(state, running=False)


def _save(state: AppState) -> AppState:
    """Persist the inventory, clearing ``dirty`` on success.

    A failed save is logged and re-raised; :func:`dispatch` reports it and
    keeps the previous state (including ``dirty``) so the user can retry.
    """
    try:
        state.save_fn(state.inventory)
    except PersistenceError as exc:
        logger.warning("save failed: %s", exc)
        raise
    logger.info("inventory saved (%s)", dict(state.inventory.description))
    return write_message(replace(state, dirty=False), "inventory saved")


def _cmd_write(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.WRITE, args, 0, 0)
    return _save(state)


def _cmd_write_quit(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.WRITE_QUIT, args, 0, 0)
    return replace(_save(state), running=False)


def _cmd_clear(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.CLEAR, args, 0, 0)
    return clear_messages(state)


def _cmd_view_messages(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.VIEW_MESSAGES, args, 0, 0)
    return set_view(state, View.MESSAGES)


def _cmd_view_overview(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.VIEW_OVERVIEW, args, 0, 0)
    return set_view(state, View.OVERVIEW)


def _cmd_help(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.HELP, args, 0, 0)
    for line in HELP_LINES:
        state = write_message(state, line)
    return state


def _mutated(state: AppState, inventory: Inventory, message: str) -> AppState:
    """Adopt ``inventory`` and flag the session as having unsaved changes."""
    state = replace(state, inventory=inventory, dirty=True, needs_redraw=True)
    return write_message(state, message)


def _cmd_add_tag(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.ADD_TAG, args, 1, 1)
    tag_id = state.inventory.cnt_tag
    inventory = add_tag(state.inventory, args[0])
    return _mutated(state, inventory, f"added tag {tag_id} '{args[0]}'")


def _cmd_add_compartment(state: AppState, verb_text: str, args: List[str]) -> AppState:
    _expect(verb_text, Verb.ADD_COMPARTMENT, args, 1, 1)
    compartment_id = state.inventory.cnt_compartment
    inventory = add_compartment(state.inventory, args[0])
    return _mutated(state, inventory, f"added compartment {compartment_id} '{args[0]}'")


def _cmd_add_container(state: AppState, verb_text: str, args: List[str]) -> AppState:
    """``:acont <name> <compartment_id> [tag_id...]``.

    Every id is parsed before the store is touched, so a malformed tag id
    fails the command just like an unknown one.
    """
    _expect(verb_text, Verb.ADD_CONTAINER, args, 2, None)
    name = args[0]
    compartment_id = parse_id(args[1])
    tag_ids = [parse_id(text) for text in args[2:]]
    container_id = state.inventory.cnt_container
    inventory = add_container(state.inventory, name, compartment_id, tag_ids)
    return _mutated(
        state,
        inventory,
        f"added container {container_id} '{name}' to compartment {compartment_id}",
    )


def _cmd_add_item(state: AppState, verb_text: str, args: List[str]) -> AppState:
    """``:aitem <name> <container_id> [tag_id...]``."""
    _expect(verb_text, Verb.ADD_ITEM, args, 2, None)
    name = args[0]
    container_id = parse_id(args[1])
    tag_ids = [parse_id(text) for text in args[2:]]
    item_id = state.inventory.cnt_item
    inventory = add_item(state.inventory, name, container_id, tag_ids)
    return _mutated(
        state, inventory, f"added item {item_id} '{name}' to container {container_id}"
    )


_HANDLERS: Dict[Verb, Handler] = {
    Verb.QUIT: _cmd_quit,
    Verb.FORCE_QUIT: _cmd_force_quit,
    Verb.WRITE: _cmd_write,
    Verb.WRITE_QUIT: _cmd_write_quit,
    Verb.CLEAR: _cmd_clear,
    Verb.VIEW_MESSAGES: _cmd_view_messages,
    Verb.VIEW_OVERVIEW: _cmd_view_overview,
    Verb.HELP: _cmd_help,
    Verb.ADD_TAG: _cmd_add_tag,
    Verb.ADD_COMPARTMENT: _cmd_add_compartment,
    Verb.ADD_CONTAINER: _cmd_add_container,
    Verb.ADD_ITEM: _cmd_add_item,
}
