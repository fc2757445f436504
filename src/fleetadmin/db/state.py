"""JSON state file holding every known project."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fleetadmin.models.project import Project

log = logging.getLogger(__name__)


class ProjectStateStore:
    """Whole-file JSON store for projects.

    Reads are lenient: a missing or unreadable file yields an empty list so the
    control plane stays reachable, and a record that fails validation is
    skipped without hiding its neighbours. Skipped records are written back
    untouched whenever the store rewrites the file. Writes replace the file
    atomically. Only one orchestrator process may write the file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> list[Project]:
        projects: list[Project] = []
        for record in await self._read_records():
            project = self._parse(record)
            if project is not None:
                projects.append(project)
        return projects

    async def write(self, projects: list[Project]) -> None:
        await self._write_records([project.to_record() for project in projects])

    async def get(self, name: str) -> Project | None:
        return next((project for project in await self.read() if project.name == name), None)

    async def update(self, name: str, **changes: Any) -> Project | None:
        """Apply field changes to one project; returns None if it is gone."""
        async with self._write_lock:
            records = await self._read_records()
            for index, record in enumerate(records):
                project = self._parse(record)
                if project is None or project.name != name:
                    continue
                updated = project.model_copy(update=changes)
                records[index] = updated.to_record()
                await self._write_records(records)
                return updated
        return None

    async def remove(self, name: str) -> bool:
        async with self._write_lock:
            records = await self._read_records()
            remaining = [
                record
                for record in records
                if not (isinstance(record, dict) and record.get("name") == name)
            ]
            if len(remaining) == len(records):
                return False
            await self._write_records(remaining)
            return True

    async def _read_records(self) -> list[Any]:
        try:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except FileNotFoundError:
            log.debug("state file %s does not exist yet", self._path)
            return []
        except OSError as exc:
            log.warning("state file %s unreadable, treating as empty: %s", self._path, exc)
            return []

        try:
            records = json.loads(raw)
        except ValueError as exc:
            log.warning("state file %s is corrupt, treating as empty: %s", self._path, exc)
            return []
        if not isinstance(records, list):
            log.warning(
                "state file %s holds %s, not a JSON array; treating as empty",
                self._path,
                type(records).__name__,
            )
            return []
        return records

    async def _write_records(self, records: list[Any]) -> None:
        await asyncio.to_thread(self._replace_file, records)

    def _replace_file(self, records: list[Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".projects-", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2)
                handle.write("\n")
            os.replace(tmp_name, self._path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _parse(self, record: Any) -> Project | None:
        try:
            return Project.model_validate(record)
        except ValidationError as exc:
            label = record.get("name", "?") if isinstance(record, dict) else record
            log.warning(
                "skipping invalid project record %r in %s: %s",
                label,
                self._path,
                exc.error_count(),
            )
            return None
