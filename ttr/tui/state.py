"""Session state shared between menu redraws and task runs."""
from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text


@dataclass
class UIState:
    """UI session state.

    `status_line` is the outcome of the last task run and is shown above the
    menu until the next run replaces it. `error` is a transient message shown
    on the next redraw only.
    """

    status_line: Text | None = None
    error: str | None = None

    def flash(self, message: str) -> None:
        """Queue a one-shot message for the next redraw."""
        self.error = message

    def take_error(self) -> str | None:
        """Return the pending message and clear it."""
        error, self.error = self.error, None
        return error
