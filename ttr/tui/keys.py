"""Blocking single-key input.

Raw mode is held only while waiting for a key; output between reads is
written in cooked mode.
"""
from __future__ import annotations

import select
from collections import deque

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress

from ..errors import TerminalError

# Wake up periodically while waiting; expiry means nothing
POLL_TIMEOUT = 60.0
# How long a lone Escape waits for the rest of an escape sequence
ESCAPE_TIMEOUT = 0.05


def _readable(fileno: int, timeout: float) -> bool:
    ready, _, _ = select.select([fileno], [], [], timeout)
    return bool(ready)


class KeyReader:
    """Reads key presses from the terminal one at a time."""

    def __init__(self, key_input: Input | None = None):
        self._input = key_input
        self._pending: deque[KeyPress] = deque()

    @property
    def key_input(self) -> Input:
        if self._input is None:
            self._input = create_input(always_prefer_tty=True)
        return self._input

    def next_key(self) -> KeyPress:
        """Block until a key is pressed and return it.

        Raises:
            TerminalError: The input stream was closed
        """
        if not self._pending:
            inp = self.key_input
            with inp.raw_mode():
                while not self._pending:
                    self._pending.extend(self._read_batch(inp))
        return self._pending.popleft()

    def _read_batch(self, inp: Input) -> list[KeyPress]:
        if not _readable(inp.fileno(), POLL_TIMEOUT):
            return []
        keys = inp.read_keys()
        if keys:
            return keys
        if inp.closed:
            raise TerminalError("Keyboard input closed")
        if not _readable(inp.fileno(), ESCAPE_TIMEOUT):
            return inp.flush_keys()
        return []
