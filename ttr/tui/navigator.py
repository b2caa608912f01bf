"""Stack-based navigation through the task tree."""
from __future__ import annotations

from dataclasses import dataclass

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from ..models import Group, Task
from .state import UIState

BREADCRUMB_SEPARATOR = " → "


@dataclass(frozen=True)
class Quit:
    """The user left the menu without picking a task."""


@dataclass(frozen=True)
class Selected:
    """The user picked `task`."""

    task: Task


class Navigator:
    """Stack of groups from the root to the menu being shown.

    - Push when a group key is pressed
    - Pop on Backspace/Escape (the root is never popped)
    - Resolve a task key into a selection
    """

    def __init__(self, root: Group, state: UIState | None = None):
        self.stack: list[Group] = [root]
        self.state = state or UIState()

    def push(self, group: Group) -> None:
        self.stack.append(group)

    def pop(self) -> Group | None:
        """Go back one level.

        Returns:
            The group that was popped, or None if at root
        """
        if len(self.stack) > 1:
            return self.stack.pop()
        return None

    def current(self) -> Group:
        return self.stack[-1]

    def depth(self) -> int:
        return len(self.stack)

    def breadcrumbs(self) -> str:
        """Names of the groups below the root, e.g. "foo → bar"."""
        return BREADCRUMB_SEPARATOR.join(g.name for g in self.stack[1:])

    def handle_key(self, key_press: KeyPress) -> Quit | Selected | None:
        """Apply one key press.

        Returns:
            Quit or Selected when navigation is over, None to keep browsing
            (invalid keys leave a message on the state)
        """
        key = key_press.key

        if key == "q":
            return Quit()
        if key == " ":
            self.state.flash("Whitespace is not allowed")
            return None
        if key in (Keys.Backspace, Keys.Escape):
            if self.pop() is None:
                self.state.flash("This is the root")
            return None
        if not isinstance(key, Keys):
            group = self.current()
            task = group.find_task(key)
            if task is not None:
                return Selected(task)
            child = group.find_group(key)
            if child is not None:
                self.push(child)
                return None
            self.state.flash(f"No task for key: {key}")
            return None

        self.state.flash("Please enter a character key")
        return None
