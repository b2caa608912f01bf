"""TUI screens: the task menu and the post-run confirmation prompt."""
from .confirm import NextAction, confirm_task
from .menu import select_task

__all__ = ["NextAction", "confirm_task", "select_task"]
