"""Operation journal models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    """Lifecycle operations that touch external infrastructure."""

    CREATE = "create"
    START = "start"
    STOP = "stop"
    DESTROY = "destroy"
    BACKUP = "backup"


class Outcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationEvent(BaseModel):
    """Append-only record of one lifecycle operation."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    project: str
    operation: Operation
    outcome: Outcome
    exit_code: int | None = Field(alias="exitCode", default=None)
    detail: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
