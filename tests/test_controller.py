"""End-to-end tests for the select → run → confirm loop."""
from __future__ import annotations

import io
from pathlib import Path

import pytest
from prompt_toolkit.keys import Keys
from rich.console import Console

from ttr.config import CONFIG_FILENAME, load_config_file
from ttr.controller import Controller, Options, format_status_line
from ttr.merge import merge_groups
from ttr.models import Task
from ttr.process import ExitStatus, ProcessRunner

CONFIG = """
groups:
  - name: foo
    key: f
    tasks:
      - name: bar
        key: b
        cmd: "true"
      - name: boo
        key: o
        cmd: "false"
"""


class CountingRunner(ProcessRunner):
    def __init__(self):
        super().__init__()
        self.ran: list[str] = []

    def run(self, task: Task) -> ExitStatus:
        self.ran.append(task.name)
        return super().run(task)


@pytest.fixture
def root(tmp_path: Path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(CONFIG, encoding="utf-8")
    return merge_groups([load_config_file(path)])


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=80, color_system=None)


def _controller(root, console, keys, **options):
    runner = CountingRunner()
    return Controller(root, Options(**options), console, keys, runner), runner


def test_successful_task_exits_without_confirmation(root, console, scripted_keys):
    controller, runner = _controller(root, console, scripted_keys("f", "b"))

    assert controller.run() == 0
    assert runner.ran == ["bar"]
    assert "Press Enter" not in console.file.getvalue()
    assert controller.state.status_line.plain == "Task bar completed"


def test_failed_task_shows_confirmation(root, console, scripted_keys):
    controller, runner = _controller(root, console, scripted_keys("f", "o", Keys.Enter))

    assert controller.run() == 0
    assert runner.ran == ["boo"]
    out = console.file.getvalue()
    assert "Task failed (exit status: 1)" in out
    assert "Press Enter to continue" in out
    assert controller.state.status_line.plain == "Task boo failed (exit status: 1)"


@pytest.mark.parametrize("key", ["q", Keys.Escape])
def test_quit_from_confirmation_exits(root, console, scripted_keys, key):
    controller, runner = _controller(root, console, scripted_keys("f", "o", key))

    assert controller.run() == 0
    assert runner.ran == ["boo"]


@pytest.mark.parametrize("key", ["q", Keys.Escape])
def test_quit_from_confirmation_in_loop_mode_returns_to_menu(root, console, scripted_keys, key):
    keys = scripted_keys("f", "o", key, "f", "o", Keys.Enter, "q")
    controller, runner = _controller(root, console, keys, loop_mode=True)

    assert controller.run() == 0
    assert runner.ran == ["boo", "boo"]
    assert not keys.keys


def test_repeat_runs_same_task_again(root, console, scripted_keys):
    keys = scripted_keys("f", "o", "r", "r", Keys.Enter)
    controller, runner = _controller(root, console, keys)

    controller.run()

    assert runner.ran == ["boo", "boo", "boo"]


def test_select_returns_to_menu_with_status_line(root, console, scripted_keys):
    keys = scripted_keys("f", "o", "s", "f", "b")
    controller, runner = _controller(root, console, keys)

    assert controller.run() == 0
    assert runner.ran == ["boo", "bar"]
    assert "Task boo failed (exit status: 1)" in console.file.getvalue()


def test_select_then_quit(root, console, scripted_keys):
    controller, runner = _controller(root, console, scripted_keys("f", "o", "s", "q"))

    assert controller.run() == 0
    assert runner.ran == ["boo"]


def test_enter_in_loop_mode_returns_to_menu(root, console, scripted_keys):
    keys = scripted_keys("f", "o", Keys.Enter, "f", "b", "q")
    controller, runner = _controller(root, console, keys, loop_mode=True)

    assert controller.run() == 0
    assert runner.ran == ["boo", "bar"]


def test_loop_mode_success_goes_back_to_menu(root, console, scripted_keys):
    keys = scripted_keys("f", "b", "f", "b", "q")
    controller, runner = _controller(root, console, keys, loop_mode=True)

    controller.run()

    assert runner.ran == ["bar", "bar"]
    assert "Press Enter" not in console.file.getvalue()


def test_confirm_option_prompts_after_success(root, console, scripted_keys):
    controller, runner = _controller(root, console, scripted_keys("f", "b", Keys.Enter), confirm=True)

    controller.run()

    out = console.file.getvalue()
    assert "Task completed" in out
    assert "Press Enter to continue" in out


def test_task_confirm_flag_prompts_after_success(tmp_path, console, scripted_keys):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("tasks: [{name: date, key: d, cmd: 'true', confirm: true}]\n", encoding="utf-8")
    root = load_config_file(path)
    controller, runner = _controller(root, console, scripted_keys("d", "s", "q"))

    controller.run()

    assert "Press Enter to continue" in console.file.getvalue()
    assert runner.ran == ["date"]


def test_clear_screen_before_run(root, console, scripted_keys, monkeypatch):
    cleared = []
    monkeypatch.setattr(console, "clear", lambda *a, **kw: cleared.append(True))

    plain, _ = _controller(root, console, scripted_keys("f", "b"))
    plain.run()
    without_flag = len(cleared)

    cleared.clear()
    flagged, _ = _controller(root, console, scripted_keys("f", "b"), clear=True)
    flagged.run()

    assert len(cleared) == without_flag + 1


def test_quit_from_menu_runs_nothing(root, console, scripted_keys):
    controller, runner = _controller(root, console, scripted_keys("q"))

    assert controller.run() == 0
    assert runner.ran == []


def test_format_status_line():
    task = Task(name="bar", key="b", cmd="true")

    assert format_status_line(task, ExitStatus(0)).plain == "Task bar completed"
    assert format_status_line(task, ExitStatus(-15)).plain == "Task bar failed (signal: 15 (SIGTERM))"
