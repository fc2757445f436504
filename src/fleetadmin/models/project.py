"""Project domain models."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


def is_valid_project_name(name: str) -> bool:
    """Return whether ``name`` is usable as a project key and path segment."""
    return bool(PROJECT_NAME_PATTERN.fullmatch(name))


class Project(BaseModel):
    """One managed service instance as recorded in the state file."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(pattern=PROJECT_NAME_PATTERN.pattern)
    api_port: int = Field(alias="apiPort")
    db_port: int = Field(alias="dbPort")
    studio_port: int = Field(alias="studioPort")
    path: Path | None = None
    created_at: datetime = Field(alias="createdAt", default_factory=lambda: datetime.now(UTC))
    enabled: bool = True
    last_backup: datetime | None = Field(alias="lastBackup", default=None)

    def to_record(self) -> dict[str, object]:
        """Serialize with on-disk field names, keeping keys the model does not know."""
        exclude = {"path"} if self.path is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
