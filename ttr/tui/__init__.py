"""Terminal UI for picking a task.

Single-key menu navigation over the merged task tree.
"""
from .keys import KeyReader
from .navigator import Navigator, Quit, Selected
from .state import UIState

__all__ = ["KeyReader", "Navigator", "Quit", "Selected", "UIState"]
