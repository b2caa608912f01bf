"""Task tree entities.

A config file describes a tree of groups (menus) and tasks (leaves), each
bound to a single-character key. Entities are frozen: working directory
resolution and merging build new trees instead of editing nodes in place.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Identity of the synthetic group wrapping one config file
ROOT_NAME = "ROOT"
ROOT_KEY = "_"


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    key: str

    @field_validator("key")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"key must be a single character, got {value!r}")
        return value


class Task(_Entity):
    """A leaf action: one shell command bound to a key.

    `cmd` runs as ``sh -c "exec <cmd>"``. `working_dir` is resolved against
    the directory of the defining config file at load time; when it is None
    the task runs in the launcher's current directory.
    """

    cmd: str
    confirm: bool = False
    clear: bool = False
    working_dir: Path | None = None
    env: dict[str, str] = Field(default_factory=dict)
    clear_env: bool = False

    @field_validator("env", mode="before")
    @classmethod
    def _null_env(cls, value):
        return {} if value is None else value


class Group(_Entity):
    """A menu node owning child groups and tasks."""

    groups: tuple[Group, ...] = ()
    tasks: tuple[Task, ...] = ()

    @field_validator("groups", "tasks", mode="before")
    @classmethod
    def _null_children(cls, value):
        return () if value is None else value

    @property
    def is_empty(self) -> bool:
        return not self.groups and not self.tasks

    def find_task(self, key: str) -> Task | None:
        return next((t for t in self.tasks if t.key == key), None)

    def find_group(self, key: str) -> Group | None:
        return next((g for g in self.groups if g.key == key), None)

    def iter_tasks(self) -> Iterator[Task]:
        """Yield every task reachable from this group, depth first."""
        pending: list[Group] = [self]
        while pending:
            group = pending.pop()
            yield from group.tasks
            pending.extend(reversed(group.groups))


Group.model_rebuild()


def make_root(groups=(), tasks=()) -> Group:
    """Wrap the top-level groups/tasks of one config file."""
    return Group(name=ROOT_NAME, key=ROOT_KEY, groups=groups, tasks=tasks)
