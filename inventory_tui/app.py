"""Interactive session: logging setup, main loop and entry point.

The loop owns the :class:`AppState`. Each iteration it checks the terminal
size, paints a frame only if ``needs_redraw`` is set, then blocks on the event
channel and feeds key events to :func:`inventory_tui.editor.handle_key`.
Ticks carry no payload; they just wake the loop so resizes are noticed.
"""

import logging
import sys
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Tuple

from rich.console import Console
from rich.live import Live

from inventory_tui.app_state import (
    AppState,
    mark_rendered,
    new_app_state,
    observe_terminal_size,
)
from inventory_tui.config import AppConfig, default_config
from inventory_tui.editor import handle_key
from inventory_tui.events import Events, Input
from inventory_tui.persistence import open_inventory, save_inventory
from inventory_tui.renderer import build_frame
from inventory_tui.terminal import TerminalError, raw_mode, read_keys

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PaintFn = Callable[[AppState], None]
SizeFn = Callable[[], Tuple[int, int]]


def configure_logging(log_path: Path, level: int = logging.INFO) -> None:
    """Send log records to ``log_path``; the terminal belongs to the UI."""
    root = logging.getLogger()
    root.setLevel(level)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def run_loop(state: AppState, events: Events, paint: PaintFn, size: SizeFn) -> AppState:
    """Run until a quit command clears ``state.running``.

    Args:
        state (AppState): Initial session state.
        events (Events): Event channel to consume.
        paint (PaintFn): Draws one frame for the given state.
        size (SizeFn): Returns the current (columns, rows) of the terminal.

    Returns:
        AppState: The final state (``running`` is False).
    """
    while state.running:
        state = observe_terminal_size(state, size())
        if state.needs_redraw:
            paint(state)
            state = mark_rendered(state)
        event = events.next()
        if isinstance(event, Input):
            state = handle_key(state, event.key)
    return state


def run(
    config: AppConfig, console: Optional[Console] = None, fd: Optional[int] = None
) -> int:
    """Open the inventory and run the interactive session.

    Nothing touches the disk until the terminal (``fd``, standard input by
    default) has been switched to cbreak mode.

    Returns:
        int: Process exit status.
    """
    console = console or Console()
    if fd is None:
        fd = sys.stdin.fileno()
    try:
        with raw_mode(fd):
            opened = open_inventory(config.inventory_path)
            state = new_app_state(
                opened.inventory,
                partial(save_inventory, path=opened.path),
                config.history_templates,
                opened.banner,
            )
            events = Events(read_keys(fd), config.tick_rate)

            def size() -> Tuple[int, int]:
                return (console.size.width, console.size.height)

            try:
                with Live(console=console, screen=True, auto_refresh=False) as live:

                    def paint(frame_state: AppState) -> None:
                        live.update(build_frame(frame_state, size()), refresh=True)

                    final = run_loop(state, events, paint, size)
            finally:
                events.close()
    except TerminalError as exc:
        logger.error("%s", exc)
        console.print(f"inventory_tui: {exc}", style="red")
        return 1

    logger.info("session ended (unsaved changes discarded: %s)", final.dirty)
    return 0


def main() -> None:
    config = default_config()
    configure_logging(config.log_path)
    sys.exit(run(config))
