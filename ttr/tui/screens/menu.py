"""Task menu screen."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..components import render_menu
from ..navigator import Navigator, Quit, Selected
from ..state import UIState

if TYPE_CHECKING:
    from rich.console import Console

    from ...models import Group, Task
    from ..keys import KeyReader


def select_task(
    console: Console,
    keys: KeyReader,
    root: Group,
    state: UIState | None = None,
) -> Task | None:
    """Show the menu on the alternate screen until a task is picked.

    Args:
        console: Rich Console for output
        keys: Source of key presses
        root: Merged task tree
        state: Session state; its status line is shown above the menu

    Returns:
        The selected task, or None when the user quits
    """
    state = state or UIState()
    nav = Navigator(root, state)

    with console.screen(hide_cursor=True):
        while True:
            render_menu(console, nav, state)
            outcome = nav.handle_key(keys.next_key())
            if isinstance(outcome, Quit):
                return None
            if isinstance(outcome, Selected):
                return outcome.task
