"""Config file discovery and loading.

Search order, highest priority first:

1. `.ttr.yaml` in the current directory and every ancestor, stopping at the
   home directory (which is not collected by the walk);
2. `~/.ttr.yaml`;
3. `<user config dir>/ttr/.ttr.yaml`.

Each file becomes one root group. Relative task working directories are
rewritten against the directory of the file that defined them.
"""
from __future__ import annotations

import logging
from pathlib import Path

import platformdirs
import yaml
from pydantic import BaseModel, ValidationError

from .errors import ConfigError
from .models import Group, Task, make_root

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".ttr.yaml"
APP_NAME = "ttr"


class ConfigFile(BaseModel):
    """Top level of a config file: root groups and tasks only."""

    groups: list[Group] | None = None
    tasks: list[Task] | None = None


def _default_home() -> Path | None:
    try:
        return Path.home()
    except RuntimeError:
        return None


def discover_config_files(
    cwd: Path | None = None,
    home: Path | None = None,
    config_dir: Path | None = None,
) -> list[Path]:
    """Return existing config files in priority order.

    Args:
        cwd: Directory the upward walk starts from (defaults to the current directory)
        home: Home directory; stops the walk and forms its own tier
        config_dir: Per-user config base directory (defaults to platformdirs)

    Returns:
        Paths of config files, highest priority first

    Raises:
        ConfigError: The current directory no longer exists
    """
    if cwd is None:
        try:
            cwd = Path.cwd()
        except OSError as e:
            raise ConfigError(
                Path("."), f"current directory is not accessible ({e.strerror or e})"
            ) from e
    home = _default_home() if home is None else home
    config_dir = Path(platformdirs.user_config_dir()) if config_dir is None else config_dir

    found: list[Path] = []

    directory: Path | None = cwd
    while directory is not None:
        if home is not None and directory == home:
            break
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            found.append(candidate)
        parent = directory.parent
        directory = parent if parent != directory else None

    if home is not None:
        home_config = home / CONFIG_FILENAME
        if home_config.is_file():
            found.append(home_config)

    user_config = config_dir / APP_NAME / CONFIG_FILENAME
    if user_config.is_file():
        found.append(user_config)

    logger.debug("Discovered config files: %s", [str(p) for p in found])
    return found


def resolve_working_dirs(group: Group, base_dir: Path) -> Group:
    """Return a copy of `group` with every task working dir joined onto `base_dir`.

    Absolute working dirs are kept as they are.
    """
    tasks = tuple(
        task.model_copy(update={"working_dir": base_dir / task.working_dir})
        if task.working_dir is not None
        else task
        for task in group.tasks
    )
    groups = tuple(resolve_working_dirs(child, base_dir) for child in group.groups)
    return group.model_copy(update={"groups": groups, "tasks": tasks})


def load_config_file(path: Path) -> Group:
    """Parse one config file into a root group.

    Raises:
        ConfigError: The file is unreadable, not YAML, or not a task tree
    """
    try:
        with path.open("r", encoding="utf-8") as fh:
            document = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(path, f"cannot read file ({e.strerror or e})") from e
    except yaml.YAMLError as e:
        raise ConfigError(path, f"invalid YAML: {e}") from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ConfigError(path, "expected a mapping with 'groups' and/or 'tasks'")

    try:
        config = ConfigFile.model_validate(document)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e

    root = make_root(groups=config.groups, tasks=config.tasks)
    return resolve_working_dirs(root, path.parent)


def load_roots(paths: list[Path] | None = None) -> list[Group]:
    """Load every config file (discovered when `paths` is None), in priority order."""
    if paths is None:
        paths = discover_config_files()
    roots = []
    for path in paths:
        root = load_config_file(path)
        logger.info(
            "Loaded %s (%d groups, %d tasks at top level)",
            path,
            len(root.groups),
            len(root.tasks),
        )
        roots.append(root)
    return roots
