import threading
import time
from typing import Iterator, List

from inventory_tui.events import Event, Events, Input, Tick


def _collect_inputs(events: Events, count: int) -> List[str]:
    keys: List[str] = []
    while len(keys) < count:
        event = events.next()
        if isinstance(event, Input):
            keys.append(event.key)
    return keys


def test_keys_arrive_in_order() -> None:
    events = Events(iter("hello"), tick_rate=0.01)
    try:
        assert _collect_inputs(events, 5) == list("hello")
    finally:
        events.close()


def test_ticks_keep_coming() -> None:
    events = Events(iter(()), tick_rate=0.001)
    try:
        seen: List[Event] = [events.next() for _ in range(3)]
        assert all(isinstance(event, Tick) for event in seen)
    finally:
        events.close()


def test_key_reader_stops_after_close() -> None:
    gate = threading.Event()
    produced: List[str] = []

    def keys() -> Iterator[str]:
        yield "a"
        gate.wait(timeout=1.0)
        for key in "bcd":
            produced.append(key)
            yield key

    events = Events(keys(), tick_rate=10.0)
    assert _collect_inputs(events, 1) == ["a"]
    events.close()
    gate.set()
    time.sleep(0.05)
    # the generator is abandoned after the first rejected send
    assert produced == ["b"]
