"""Application configuration models and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppPaths(BaseModel):
    """Resolved directories for cvars runtime files."""

    base_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("CVARS_HOME", Path.home() / ".cvars"))
    )

    @property
    def config_dir(self) -> Path:
        return self.base_dir / "config"

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    def ensure(self) -> None:
        for path in (self.base_dir, self.config_dir, self.logs_dir):
            path.mkdir(parents=True, exist_ok=True)


class PersistenceSettings(BaseModel):
    config_file: str = "user.cfg"
    autosave: bool = True


class LoggingSettings(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class CvarsSettings(BaseModel):
    app_name: str = "cvars"
    paths: AppPaths = Field(default_factory=AppPaths)
    persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def config_path(self) -> Path:
        return self.paths.config_dir / self.persistence.config_file


def _maybe_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def load_settings(env_path: Path | None = None) -> CvarsSettings:
    """Load settings from a .env file, environment variables and defaults."""

    env_file = env_path or Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    overrides: dict[str, Any] = {}

    if config_file := os.getenv("CVARS_CONFIG_FILE"):
        overrides.setdefault("persistence", {})["config_file"] = config_file

    if (autosave := _maybe_bool(os.getenv("CVARS_AUTOSAVE"))) is not None:
        overrides.setdefault("persistence", {})["autosave"] = autosave

    if level := os.getenv("CVARS_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = level.upper()

    settings = CvarsSettings(**overrides)
    settings.paths.ensure()
    return settings
