"""Menu rendering for the TUI."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence, TypeVar

from rich.text import Text

from ..config import CONFIG_FILENAME
from ..models import Group, Task

if TYPE_CHECKING:
    from rich.console import Console

    from .navigator import Navigator
    from .state import UIState

T = TypeVar("T")

# ═══════════════════════════════════════════════════════════════════════════════
# GRID GEOMETRY
# ═══════════════════════════════════════════════════════════════════════════════

EDGE_PADDING = 4  # columns kept free at the screen edge
CELL_WIDTH = 20  # width of one "k → name" cell
NAME_WIDTH = 12

GROUP_KEY_STYLE = "bold blue"
TASK_KEY_STYLE = "bold green"


def column_count(width: int) -> int:
    """Number of grid columns that fit a terminal `width` wide (at least 1)."""
    return max(1, (width - EDGE_PADDING) // CELL_WIDTH)


def layout_columns(items: Sequence[T], width: int) -> list[list[T]]:
    """Split `items` column-major into columns of equal height.

    Example: 5 items, 2 columns fit -> [[a, b, c], [d, e]]
    """
    if not items:
        return []
    rows = math.ceil(len(items) / column_count(width))
    return [list(items[i : i + rows]) for i in range(0, len(items), rows)]


def truncate_name(name: str) -> str:
    """Shorten names longer than the cell allows to 11 characters plus an ellipsis."""
    if len(name) > NAME_WIDTH:
        return name[: NAME_WIDTH - 1] + "…"
    return name


def menu_items(group: Group) -> list[Group | Task]:
    """Children in display order: groups first, then tasks."""
    return [*group.groups, *group.tasks]


# ═══════════════════════════════════════════════════════════════════════════════
# RENDERING
# ═══════════════════════════════════════════════════════════════════════════════

def render_grid(console: Console, group: Group) -> None:
    """Render the children of `group` as a grid of key → name cells."""
    columns = layout_columns(menu_items(group), console.size.width)
    if not columns:
        return
    for row in range(len(columns[0])):
        line = Text("  ")
        for column in columns:
            if row >= len(column):
                break
            item = column[row]
            style = GROUP_KEY_STYLE if isinstance(item, Group) else TASK_KEY_STYLE
            line.append(" ")
            line.append(item.key, style=style)
            line.append(f" → {truncate_name(item.name):{NAME_WIDTH}}  ")
        console.print(line, overflow="crop", no_wrap=True)


def render_breadcrumbs(console: Console, nav: Navigator) -> None:
    """Render the menu title followed by the path below the root."""
    header = Text("  ")
    header.append("SELECT A TASK", style="grey50")
    if nav.depth() > 1:
        header.append(f" → {nav.breadcrumbs()}")
    console.print(header)
    console.print()


def render_menu(console: Console, nav: Navigator, state: UIState) -> None:
    """Redraw the whole menu screen for the current navigation level.

    Args:
        console: Rich Console for output
        nav: Navigator holding the current level
        state: Session state (status line, pending error)
    """
    console.clear()
    console.print()
    if state.status_line is not None:
        console.print(Text("  ") + state.status_line)
        console.print()

    group = nav.current()
    if not group.is_empty:
        render_breadcrumbs(console, nav)
        render_grid(console, group)
    else:
        console.print("    [bold]No tasks configured[/bold]")
        console.print(f"    Create file {CONFIG_FILENAME} in the current directory", markup=False)

    console.print()
    console.print("    [red]q[/red] → quit")
    if nav.depth() > 1:
        console.print(" [red]<BS>[/red] → up")

    error = state.take_error()
    if error:
        console.print()
        console.print(Text(f"   {error}", style="red"))
        console.print()
