from __future__ import annotations

import os
import sys
from collections import deque

import pytest
from prompt_toolkit.key_binding import KeyPress


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `ttr/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()


class ScriptedKeys:
    """Stands in for KeyReader: replays a fixed sequence of key presses."""

    def __init__(self, *keys):
        self.keys = deque(KeyPress(k) for k in keys)

    def next_key(self) -> KeyPress:
        if not self.keys:
            raise AssertionError("key script exhausted")
        return self.keys.popleft()


@pytest.fixture
def scripted_keys():
    """Factory for ScriptedKeys: scripted_keys("f", "b", Keys.Enter)."""
    return ScriptedKeys
