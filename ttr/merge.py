"""Merge root groups from several config files into one tree."""
from __future__ import annotations

import logging
from typing import Sequence

from .models import ROOT_KEY, Group, Task

logger = logging.getLogger(__name__)


def merge_groups(groups: Sequence[Group]) -> Group:
    """Fold same-identity groups into one, earlier groups taking priority.

    Child groups sharing a key are merged recursively. For tasks the first
    one to claim a key wins. A task is dropped when a group with the same key
    has already been registered by this or an earlier element; a group that
    only shows up in a later element does not remove a task kept before it.

    Args:
        groups: Groups ordered from highest to lowest priority

    Returns:
        The merged group (the single input itself when there is nothing to merge)
    """
    if not groups:
        return Group(name="", key=ROOT_KEY)

    first = groups[0]
    peers = [g for g in groups if g.name == first.name and g.key == first.key]
    if len(peers) == 1:
        return peers[0]

    buckets: dict[str, list[Group]] = {}
    tasks: dict[str, Task] = {}
    for group in peers:
        for child in group.groups:
            buckets.setdefault(child.key, []).append(child)

        for task in group.tasks:
            if task.key in buckets:
                logger.debug("Task %r shadowed by group with key %r", task.name, task.key)
                continue
            if task.key in tasks:
                logger.debug("Task %r dropped, key %r already taken", task.name, task.key)
                continue
            tasks[task.key] = task

    return Group(
        name=first.name,
        key=first.key,
        groups=tuple(merge_groups(bucket) for bucket in buckets.values()),
        tasks=tuple(tasks.values()),
    )
