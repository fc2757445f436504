"""Runtime configuration for the admin control plane."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings, optionally backed by a `.env` file in the root directory."""

    root_dir: Path = Field(default_factory=Path.cwd, validation_alias="FLEET_ADMIN_ROOT")
    admin_bcrypt_hash: str = Field(default="", validation_alias="ADMIN_BCRYPT_HASH")
    admin_jwt_secret: str = Field(default="", validation_alias="ADMIN_JWT_SECRET")
    host: str = Field(default="127.0.0.1", validation_alias="ADMIN_HOST")
    port: int = Field(default=6010, validation_alias="ADMIN_PORT")
    cookie_secure: bool = Field(default=True, validation_alias="ADMIN_COOKIE_SECURE")

    state_file: Path | None = Field(default=None, validation_alias="FLEET_ADMIN_STATE_FILE")
    journal_db: Path | None = Field(default=None, validation_alias="FLEET_ADMIN_JOURNAL_DB")
    ui_dir: Path | None = Field(default=None, validation_alias="FLEET_ADMIN_UI_DIR")
    backup_log_dir: Path = Field(
        default=Path("/var/log/supabase-backup"),
        validation_alias="FLEET_ADMIN_BACKUP_LOG_DIR",
    )
    platform_cli: str = Field(default="supabase", validation_alias="FLEET_ADMIN_PLATFORM_CLI")
    shell: str = Field(default="bash", validation_alias="FLEET_ADMIN_SHELL")
    log_level: str = Field(default="INFO", validation_alias="FLEET_ADMIN_LOG_LEVEL")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def state_path(self) -> Path:
        return self.state_file or self.root_dir / "state" / "projects.json"

    @property
    def journal_path(self) -> Path:
        return self.journal_db or self.root_dir / "state" / "journal.db"

    @property
    def ui_path(self) -> Path:
        return self.ui_dir or self.root_dir / "apps" / "admin-ui" / "dist"

    @property
    def scripts_dir(self) -> Path:
        return self.root_dir / "scripts"

    @property
    def session_secret(self) -> str:
        """Signing key for session tokens; empty when the server is unconfigured."""
        return self.admin_jwt_secret or self.admin_bcrypt_hash


def load_settings(root_dir: Path | None = None) -> Settings:
    """Read settings from the environment and `<root>/.env`.

    The root is `FLEET_ADMIN_ROOT` when set, else the working directory.
    """
    if root_dir is None:
        root_dir = Path(os.environ.get("FLEET_ADMIN_ROOT") or Path.cwd())
    return Settings(_env_file=root_dir / ".env")  # type: ignore[call-arg]


@lru_cache
def get_settings() -> Settings:
    return load_settings()
