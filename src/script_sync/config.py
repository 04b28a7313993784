"""Configuration management for script-sync."""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STATE_DIR_NAME = ".script-sync"
REMOTE_DIR_NAME = "remote"
MANIFEST_NAME = "appsscript.json"
IGNORE_FILE_NAME = ".claspignore"


class ProjectConfig(BaseSettings):
    """Configuration for a script-sync project."""

    # Default to the current directory but allow override with env var
    home: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the local script project",
    )

    remote_root: Optional[Path] = Field(
        default=None,
        description="Directory acting as the remote project store",
    )

    manifest_name: str = Field(
        default=MANIFEST_NAME,
        description="Base name of the manifest file that needs consent to overwrite",
    )

    file_extensions: List[str] = Field(
        default_factory=lambda: [".js", ".gs", ".ts", ".html", ".json"],
        description="File suffixes that are pushed",
    )

    ignore_file: str = Field(
        default=IGNORE_FILE_NAME,
        description="Name of the ignore file in the project root",
    )

    sync_delay: int = Field(
        default=500,
        description="Milliseconds to wait for more changes before pushing in watch mode",
        gt=0,
    )

    log_level: str = "INFO"

    env: Literal["dev", "test"] = "dev"

    model_config = SettingsConfigDict(
        env_prefix="SCRIPT_SYNC_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def state_dir(self) -> Path:
        """Get the directory for local script-sync state (logs, default remote)."""
        return self.home / STATE_DIR_NAME

    @field_validator("home")
    @classmethod
    def ensure_home_exists(cls, v: Path) -> Path:
        """Ensure the project root exists."""
        v = v.expanduser().resolve()
        if not v.is_dir():
            raise ValueError(f"Project directory does not exist: {v}")
        return v

    @model_validator(mode="after")
    def default_remote_root(self) -> "ProjectConfig":
        if self.remote_root is None:
            self.remote_root = self.state_dir / REMOTE_DIR_NAME
        else:
            self.remote_root = self.remote_root.expanduser().resolve()
            # pushing into the watched tree would trigger another push
            if self.remote_root.is_relative_to(self.home) and not self.remote_root.is_relative_to(
                self.state_dir
            ):
                raise ValueError(f"Remote store must not be inside the project: {self.remote_root}")
        return self


def get_project_config(home: Optional[Path] = None) -> ProjectConfig:
    """Load project config, optionally overriding the project root."""
    from script_sync.services.exceptions import ProjectConfigError

    try:
        if home is not None:
            return ProjectConfig(home=home)
        return ProjectConfig()
    except ValueError as e:
        raise ProjectConfigError(str(e)) from e
