"""Running a task as a foreground child process.

The child gets the launcher's terminal directly. While it runs, SIGINT
received by the launcher is forwarded to it, so Ctrl-C stops the task and
leaves the launcher alive to report the result.
"""
from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import SpawnError
from .models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExitStatus:
    """Outcome of a finished child (negative return codes mean a signal)."""

    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def signum(self) -> int | None:
        return -self.returncode if self.returncode < 0 else None

    def __str__(self) -> str:
        signum = self.signum
        if signum is None:
            return f"exit status: {self.returncode}"
        try:
            name = signal.Signals(signum).name
        except ValueError:
            return f"signal: {signum}"
        return f"signal: {signum} ({name})"


class RunningChild:
    """Pid of the task currently running, or None.

    Written by the main loop right after spawn and right after wait, read by
    the SIGINT handler. Attribute assignment is atomic under the interpreter
    lock; a signal landing around spawn or clear may miss the child.
    """

    def __init__(self) -> None:
        self._pid: int | None = None

    def store(self, pid: int) -> None:
        self._pid = pid

    def clear(self) -> None:
        self._pid = None

    def load(self) -> int | None:
        return self._pid

    def forward(self, signum: int, frame=None) -> None:
        """Signal handler: pass the signal on to the running child, if any."""
        pid = self._pid
        if pid is None:
            return
        try:
            os.kill(pid, signum)
        except ProcessLookupError:
            logger.debug("Child %s already gone, signal %s not forwarded", pid, signum)
        else:
            logger.info("Forwarded signal %s to child %s", signum, pid)

    def install(self, signum: int = signal.SIGINT):
        """Register `forward` for `signum`; returns the previous handler."""
        return signal.signal(signum, self.forward)


def build_env(task: Task, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Environment for the child: inherited (or empty with clear_env) plus task.env."""
    if task.clear_env:
        env: dict[str, str] = {}
    else:
        env = dict(os.environ if base is None else base)
    env.update(task.env)
    return env


def spawn_task(task: Task, inherit_stdio: bool = True) -> subprocess.Popen:
    """Start `task.cmd` through ``sh -c "exec ..."`` so the pid is the command's own.

    Args:
        task: Task to start
        inherit_stdio: Share the launcher's terminal; pipes otherwise

    Raises:
        SpawnError: The shell could not be started (e.g. missing or deleted working dir)
    """
    stdio = None if inherit_stdio else subprocess.PIPE
    try:
        working_dir = task.working_dir or Path.cwd()
        return subprocess.Popen(
            ["sh", "-c", f"exec {task.cmd}"],
            cwd=working_dir,
            env=build_env(task),
            stdin=stdio,
            stdout=stdio,
            stderr=stdio,
        )
    except OSError as e:
        raise SpawnError(task.name, e) from e


class ProcessRunner:
    """Runs tasks one at a time, publishing the child pid while it runs."""

    def __init__(self, running: RunningChild | None = None):
        self.running = running or RunningChild()

    def run(self, task: Task) -> ExitStatus:
        process = spawn_task(task)
        self.running.store(process.pid)
        logger.info("Started task %r (pid=%s): %s", task.name, process.pid, task.cmd)
        try:
            returncode = process.wait()
        finally:
            self.running.clear()
        status = ExitStatus(returncode)
        logger.info("Task %r finished: %s", task.name, status)
        return status
