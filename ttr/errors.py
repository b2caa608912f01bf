"""Exceptions that abort the launcher.

Anything raised from here is fatal: the CLI reports it and exits non-zero.
Invalid key presses and failing tasks are not errors and never end up here.
"""
from __future__ import annotations

from pathlib import Path


class TtrError(Exception):
    """Base class for fatal launcher errors."""


class ConfigError(TtrError):
    """A config file could not be read or does not describe a task tree."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class SpawnError(TtrError):
    """The shell for a task could not be started."""

    def __init__(self, task_name: str, cause: OSError):
        self.task_name = task_name
        self.cause = cause
        super().__init__(f"Unable to start task '{task_name}': {cause}")


class TerminalError(TtrError):
    """Key input is no longer available (stdin closed)."""
