from __future__ import annotations

import logging
import signal
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_roots
from .controller import Controller, Options
from .errors import TtrError
from .logging import setup_logging
from .merge import merge_groups
from .process import ProcessRunner, RunningChild
from .settings import load_settings
from .tui.keys import KeyReader

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="ttr: pick a task from the .ttr.yaml menu and run it",
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


def launch(
    options: Options,
    console: Console | None = None,
    keys: KeyReader | None = None,
) -> int:
    """Load the merged task tree and run the interactive loop.

    SIGINT is forwarded to the running task for the duration of the loop.

    Returns:
        Process exit code
    """
    root = merge_groups(load_roots())
    logger.info(
        "Merged tree: %d groups, %d tasks at top level, %d tasks in total",
        len(root.groups),
        len(root.tasks),
        sum(1 for _ in root.iter_tasks()),
    )

    running = RunningChild()
    previous = running.install()
    try:
        controller = Controller(
            root,
            options,
            console or Console(),
            keys or KeyReader(),
            ProcessRunner(running),
        )
        return controller.run()
    finally:
        signal.signal(signal.SIGINT, previous)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ttr {__version__}")
        raise typer.Exit()


@app.command()
def main(
    confirm: bool = typer.Option(
        False, "-c", "--confirm", help="Ask for confirmation before exiting the program"
    ),
    clear: bool = typer.Option(False, "--clear", help="Clear screen before running a task"),
    loop_mode: bool = typer.Option(
        False, "--loop", help="After a task completed, go back to the menu to run another one"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """
    [bold]ttr[/bold]: terminal task runner.

    Tasks come from [cyan].ttr.yaml[/cyan] files in the current directory and its
    parents, [cyan]~/.ttr.yaml[/cyan] and the user config directory.
    """
    settings = load_settings()
    try:
        setup_logging(settings)
    except OSError as e:
        err_console.print(f"[yellow]Warning:[/yellow] logging disabled ({escape(str(e))})")

    options = Options(confirm=confirm, clear=clear, loop_mode=loop_mode)
    try:
        code = launch(options)
    except TtrError as e:
        logger.error("%s", e)
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
