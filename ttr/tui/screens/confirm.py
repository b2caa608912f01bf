"""Post-run confirmation prompt."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from prompt_toolkit.keys import Keys
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from ...process import ExitStatus
    from ..keys import KeyReader

PREFIX = "   "


class NextAction(Enum):
    CONTINUE = "continue"
    EXIT = "exit"
    SELECT_TASK = "select"
    REPEAT_TASK = "repeat"


def _choice(key_press) -> NextAction | None:
    key = key_press.key
    if key == Keys.Enter:
        return NextAction.CONTINUE
    if key in ("q", Keys.Escape):
        return NextAction.EXIT
    if key == "r":
        return NextAction.REPEAT_TASK
    if key == "s":
        return NextAction.SELECT_TASK
    return None


def confirm_task(console: Console, keys: KeyReader, status: ExitStatus) -> NextAction:
    """Print the task outcome and wait for Enter, q/Esc, r or s.

    Any other key is ignored.
    """
    console.print()
    line = Text(PREFIX + "Task ")
    if status.success:
        line.append("completed", style="bold green")
    else:
        line.append("failed", style="bold red")
        line.append(f" ({status})")
    console.print(line)
    console.print()
    console.print(
        f"{PREFIX}Press [bold yellow]Enter[/bold yellow] to continue. "
        "[bold yellow]r[/bold yellow]epeat or [bold yellow]s[/bold yellow]elect another task..."
    )

    while True:
        action = _choice(keys.next_key())
        if action is not None:
            return action
