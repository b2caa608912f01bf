from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime knobs for the launcher itself.

    Values are loaded from environment variables. Task definitions live in
    `.ttr.yaml` files, not here.
    """

    model_config = SettingsConfigDict(extra="ignore")

    # Diagnostic logging (a file; the terminal belongs to the menu and the tasks)
    TTR_LOG_DIR: Path | None = Field(default=None)
    TTR_LOG_LEVEL: str = Field(default="WARNING")
    # Timed rotation retention count (days)
    TTR_LOG_BACKUP_COUNT: int = Field(default=7)


def load_settings() -> Settings:
    s = Settings()
    if s.TTR_LOG_DIR is None:
        s.TTR_LOG_DIR = Path(platformdirs.user_log_dir("ttr"))
    return s
