"""Select → run → report loop."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

from .process import ExitStatus, ProcessRunner
from .tui.screens import NextAction, confirm_task, select_task
from .tui.state import UIState

if TYPE_CHECKING:
    from rich.console import Console

    from .models import Group, Task
    from .tui.keys import KeyReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Global policy flags from the command line."""

    confirm: bool = False  # always show the confirmation prompt
    clear: bool = False  # clear the screen before every run
    loop_mode: bool = False  # back to the menu after a run instead of exiting


def format_status_line(task: Task, status: ExitStatus) -> Text:
    line = Text(f"Task {task.name} ")
    if status.success:
        line.append("completed", style="green")
    else:
        line.append("failed", style="red")
        line.append(f" ({status})")
    return line


class Controller:
    """Drives the menu, runs the selected task and applies the exit policy.

    The outer loop picks a task; the inner loop runs it (again, on repeat).
    The status line of the last run stays on the UI state so the next menu
    shows it.
    """

    def __init__(
        self,
        root: Group,
        options: Options,
        console: Console,
        keys: KeyReader,
        runner: ProcessRunner | None = None,
    ):
        self.root = root
        self.options = options
        self.console = console
        self.keys = keys
        self.runner = runner or ProcessRunner()
        self.state = UIState()

    def run(self) -> int:
        """Run until the user quits or a task ends the session.

        Returns:
            Process exit code
        """
        while True:
            task = select_task(self.console, self.keys, self.root, self.state)
            if task is None:
                logger.info("Quit from menu")
                return 0

            action = self._run_task(task)
            if action is NextAction.EXIT:
                return 0

    def _run_task(self, task: Task) -> NextAction:
        """Inner loop: run `task` until the policy says select again or exit."""
        while True:
            if task.clear or self.options.clear:
                self.console.clear()

            status = self.runner.run(task)
            self.state.status_line = format_status_line(task, status)

            if not status.success or task.confirm or self.options.confirm:
                action = confirm_task(self.console, self.keys, status)
                logger.debug("Confirmation for %r: %s", task.name, action.value)
                if action is NextAction.REPEAT_TASK:
                    continue
                if action is NextAction.SELECT_TASK:
                    return NextAction.SELECT_TASK
                if self.options.loop_mode:
                    return NextAction.SELECT_TASK
                return NextAction.EXIT

            if self.options.loop_mode:
                return NextAction.SELECT_TASK
            return NextAction.EXIT
