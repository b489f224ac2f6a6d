"""Frame rendering with ``rich``.

:func:`build_frame` turns an :class:`AppState` into a ``rich`` renderable:
the active view on top and the input line at the bottom. It only reads the
state; deciding *when* to paint is the main loop's job.
"""

from typing import Iterable, List, Tuple

from rich.console import RenderableType
from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from inventory_tui.app_state import AppState
from inventory_tui.inventory import Inventory
from inventory_tui.types import TagID, View
from inventory_tui.utils.lookup import containers_in, items_in, tag_names

INPUT_HEIGHT = 3
BORDER_STYLE = "yellow"

_VIEW_TITLES = {
    View.MESSAGES: "Messages [:0]",
    View.OVERVIEW: "Overview [:1]",
}


def _tag_suffix(inventory: Inventory, tag_ids: Iterable[TagID]) -> str:
    names = tag_names(inventory, tag_ids)
    return escape(f" [{', '.join(names)}]") if names else ""


def _notes_suffix(notes: str) -> str:
    return f" [dim]{escape(notes)}[/]" if notes else ""


def overview_tree(inventory: Inventory) -> Tree:
    """Compartment → container → item hierarchy plus the tag list."""
    root = Tree("inventory", guide_style="dim")
    for compartment in inventory.compartments:
        comp_node = root.add(f"[bold]{compartment.id}[/] {escape(compartment.name)}")
        for container in containers_in(inventory, compartment):
            cont_node = comp_node.add(
                f"{container.id} {escape(container.name)}"
                + _tag_suffix(inventory, container.tag_ids)
            )
            for item in items_in(inventory, container):
                cont_node.add(
                    f"{item.id} {escape(item.name)} x{item.amount}"
                    + _tag_suffix(inventory, item.tag_ids)
                    + _notes_suffix(item.notes)
                )
    if inventory.tags:
        tags = root.add("[italic]tags[/]")
        for tag in inventory.tags:
            tags.add(f"{tag.id} {escape(tag.name)}" + _notes_suffix(tag.notes))
    return root


def message_text(messages: str, height: int) -> Text:
    """Return the last ``height`` lines of the message pane."""
    lines: List[str] = messages.splitlines()
    if height > 0:
        lines = lines[-height:]
    return Text("\n".join(lines))


def input_line(state: AppState) -> Text:
    """Input text with the caret cell shown in reverse video."""
    text = Text(state.input_text + " ")
    text.stylize("reverse", state.caret, state.caret + 1)
    return text


def build_frame(state: AppState, size: Tuple[int, int]) -> RenderableType:
    """Compose the full-screen frame for a terminal of ``size`` (columns, rows)."""
    _, rows = size
    body_height = max(rows - INPUT_HEIGHT - 2, 0)
    body: RenderableType
    if state.view == View.OVERVIEW:
        body = overview_tree(state.inventory)
    else:
        body = message_text(state.messages, body_height)

    title = _VIEW_TITLES[state.view] + (" [+]" if state.dirty else "")
    layout = Layout()
    layout.split_column(
        Layout(Panel(body, title=title, border_style=BORDER_STYLE), name="body"),
        Layout(
            Panel(input_line(state), title="Input", border_style=BORDER_STYLE),
            name="input",
            size=INPUT_HEIGHT,
        ),
    )
    return layout
