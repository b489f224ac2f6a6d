"""Terminal input helpers.

:func:`raw_mode` puts the controlling terminal into cbreak mode (no line
buffering, no echo) for the duration of the session and always restores it.
:func:`read_keys` is the blocking key source for the key-reader thread; it
reads raw bytes, decodes them as UTF-8 and turns escape sequences into
:class:`inventory_tui.editor.Key` events via :func:`decode_keys`.
"""

import codecs
import os
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from inventory_tui.editor import Key, KeyEvent

ESC = "\x1b"

_ESCAPE_SEQUENCES = {
    "[A": Key.UP,
    "[B": Key.DOWN,
    "[C": Key.RIGHT,
    "[D": Key.LEFT,
    "OA": Key.UP,
    "OB": Key.DOWN,
    "OC": Key.RIGHT,
    "OD": Key.LEFT,
    "[H": Key.HOME,
    "[F": Key.END,
    "OH": Key.HOME,
    "OF": Key.END,
    "[1~": Key.HOME,
    "[4~": Key.END,
    "[7~": Key.HOME,
    "[8~": Key.END,
}

_CONTROL_KEYS = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


class TerminalError(Exception):
    """The terminal could not be put into interactive mode."""


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Switch ``fd`` to cbreak mode, restoring the previous settings on exit.

    Raises:
        TerminalError: If ``fd`` is not a terminal.
    """
    try:
        old_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except termios.error as exc:
        raise TerminalError(f"cannot enter raw mode: {exc}") from exc
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _escape_length(text: str, start: int) -> int:
    """Length of the CSI/SS3 sequence body starting after ``ESC`` at ``start``."""
    if start >= len(text) or text[start] not in "[O":
        return 0
    end = start + 1
    while end < len(text):
        ch = text[end]
        end += 1
        if ch.isalpha() or ch == "~":
            return end - start
    return end - start


def decode_keys(text: str) -> List[KeyEvent]:
    """Split a chunk of decoded terminal input into key events.

    A lone ``ESC`` (one not followed by ``[`` or ``O``) is the Escape key.
    Unrecognized escape sequences and other control characters are dropped.
    """
    keys: List[KeyEvent] = []
    idx = 0
    while idx < len(text):
        ch = text[idx]
        if ch == ESC:
            length = _escape_length(text, idx + 1)
            if length == 0:
                keys.append(Key.ESCAPE)
            else:
                key = _ESCAPE_SEQUENCES.get(text[idx + 1 : idx + 1 + length])
                if key is not None:
                    keys.append(key)
            idx += 1 + length
            continue
        if ch in _CONTROL_KEYS:
            keys.append(_CONTROL_KEYS[ch])
        elif ch.isprintable():
            keys.append(ch)
        idx += 1
    return keys


def _split_incomplete(text: str, more_buffered: bool) -> Tuple[str, str]:
    """Split off a trailing escape sequence that the next read may complete.

    A bare trailing ``ESC`` is held back only when ``more_buffered`` says the
    read filled its buffer; otherwise it is the Escape key and goes out now.
    """
    start = text.rfind(ESC)
    if start == -1:
        return text, ""
    body = text[start + 1 :]
    if not body:
        return (text[:start], ESC) if more_buffered else (text, "")
    if body[0] in "[O" and not any(ch.isalpha() or ch == "~" for ch in body[1:]):
        return text[:start], text[start:]
    return text, ""


def read_keys(fd: int, chunk_size: int = 1024) -> Iterator[KeyEvent]:
    """Yield key events read from ``fd`` until end of input.

    Multi-byte characters and escape sequences may span reads; both are
    carried over to the next chunk instead of being decoded in halves.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""
    while True:
        data = os.read(fd, chunk_size)
        if not data:
            yield from decode_keys(pending + decoder.decode(b"", final=True))
            return
        text, pending = _split_incomplete(
            pending + decoder.decode(data), len(data) == chunk_size
        )
        yield from decode_keys(text)
