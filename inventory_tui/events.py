"""Event multiplexer.

Two producer threads feed one unbounded ``queue.Queue``:

* the key reader forwards every decoded key from a blocking key source as an
  :class:`Input` event;
* the ticker emits a :class:`Tick` every ``tick_rate`` seconds.

The main loop is the only consumer and calls :meth:`Events.next`, which blocks
until the next event in arrival order. Events are never dropped or merged.
Both producers are daemon threads and are never joined; they stop once their
source is exhausted or :meth:`Events.close` has been called.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Iterable, Union

from inventory_tui.editor import KeyEvent

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 0.1


@dataclass(frozen=True)
class Input:
    """A key pressed by the user."""

    key: KeyEvent


@dataclass(frozen=True)
class Tick:
    """Periodic heartbeat; lets the loop notice terminal resizes."""


Event = Union[Input, Tick]


class Events:
    """Key and tick producers sharing a single channel.

    Args:
        keys: Blocking iterable of decoded key events (e.g.
            :func:`inventory_tui.terminal.read_keys`).
        tick_rate: Seconds between ticks.
    """

    def __init__(self, keys: Iterable[KeyEvent], tick_rate: float = DEFAULT_TICK_RATE):
        self._queue: queue.Queue[Event] = queue.Queue()
        self._closed = threading.Event()
        self.tick_rate = tick_rate
        self._input_thread = threading.Thread(
            target=self._read_input, args=(keys,), daemon=True, name="key-reader"
        )
        self._tick_thread = threading.Thread(
            target=self._tick, daemon=True, name="ticker"
        )
        self._input_thread.start()
        self._tick_thread.start()

    def next(self) -> Event:
        """Block until the next event arrives and return it."""
        return self._queue.get()

    def close(self) -> None:
        """Detach the consumer; producers exit at their next send."""
        self._closed.set()

    def _send(self, event: Event) -> bool:
        if self._closed.is_set():
            return False
        self._queue.put(event)
        return True

    def _read_input(self, keys: Iterable[KeyEvent]) -> None:
        for key in keys:
            if not self._send(Input(key)):
                return
        logger.debug("key source exhausted")

    def _tick(self) -> None:
        while self._send(Tick()):
            time.sleep(self.tick_rate)
