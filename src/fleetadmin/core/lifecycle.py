"""Project lifecycle coordination.

Every infrastructure action is delegated to an external command. The
coordinator validates input, resolves projects from the state file, runs the
command, reconciles the state file on success and journals the outcome.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from fleetadmin.core.errors import (
    BackupLogMissing,
    CommandFailed,
    InvalidName,
    ProjectNotFound,
    ProjectPathMissing,
)
from fleetadmin.core.executor import CommandExecutor, CommandResult
from fleetadmin.core.locks import ProjectLocks
from fleetadmin.db.journal import OperationJournal
from fleetadmin.db.state import ProjectStateStore
from fleetadmin.models.events import Operation, OperationEvent, Outcome
from fleetadmin.models.project import Project, is_valid_project_name

log = logging.getLogger(__name__)

PURGE_FLAG = "--purge"


@dataclass(slots=True, frozen=True)
class CommandLayout:
    """Where the external collaborators live and how they are invoked."""

    root_dir: Path
    scripts_dir: Path
    backup_log_dir: Path
    platform_cli: str = "supabase"
    shell: str = "bash"

    def script(self, name: str) -> str:
        return str(self.scripts_dir / name)


class LifecycleCoordinator:
    """Create, start, stop, destroy and back up projects."""

    def __init__(
        self,
        *,
        store: ProjectStateStore,
        executor: CommandExecutor,
        layout: CommandLayout,
        locks: ProjectLocks | None = None,
        journal: OperationJournal | None = None,
    ) -> None:
        self._store = store
        self._executor = executor
        self._layout = layout
        self._locks = locks or ProjectLocks()
        self._journal = journal

    async def list(self) -> list[Project]:
        return await self._store.read()

    async def get(self, name: str) -> Project:
        project = await self._store.get(name)
        if project is None:
            raise ProjectNotFound(name)
        return project

    async def create(self, name: str) -> Project | None:
        """Provision a project; returns its record once the script has written it."""
        name = name.strip()
        if not is_valid_project_name(name):
            raise InvalidName(name)
        async with self._locks.hold(name):
            result = await self._executor.run(
                self._layout.shell,
                [self._layout.script("create-project.sh"), name],
                cwd=self._layout.root_dir,
            )
            await self._finish(Operation.CREATE, name, result)
        return await self._store.get(name)

    async def start(self, name: str) -> Project:
        return await self._run_platform(Operation.START, name, enabled=True)

    async def stop(self, name: str) -> Project:
        return await self._run_platform(Operation.STOP, name, enabled=False)

    async def destroy(self, name: str, *, purge: bool = False) -> None:
        """Tear down a project; the store entry is dropped once the script succeeds."""
        if not is_valid_project_name(name):
            raise InvalidName(name)
        args: Sequence[str] = [self._layout.script("destroy-project.sh"), name]
        if purge:
            args = [*args, PURGE_FLAG]
        async with self._locks.hold(name):
            result = await self._executor.run(self._layout.shell, args, cwd=self._layout.root_dir)
            await self._finish(Operation.DESTROY, name, result)
            if await self._store.remove(name):
                log.info("removed %s from state file", name)

    async def backup(self, name: str) -> Project:
        async with self._locks.hold(name):
            project = await self.get(name)
            result = await self._executor.run(
                self._layout.shell,
                [self._layout.script("backup-now.sh"), name],
                cwd=self._layout.root_dir,
            )
            await self._finish(Operation.BACKUP, name, result)
            updated = await self._store.update(name, last_backup=datetime.now(UTC))
        return updated or project

    async def backup_log(self, name: str) -> str:
        if not is_valid_project_name(name):
            raise BackupLogMissing(name)
        log_file = self._layout.backup_log_dir / f"{name}.log"
        try:
            return await asyncio.to_thread(
                log_file.read_text, encoding="utf-8", errors="replace"
            )
        except FileNotFoundError as exc:
            raise BackupLogMissing(name) from exc

    async def _run_platform(self, operation: Operation, name: str, *, enabled: bool) -> Project:
        async with self._locks.hold(name):
            project = await self.get(name)
            if project.path is None:
                await self._record(
                    OperationEvent(
                        project=name,
                        operation=operation,
                        outcome=Outcome.FAILED,
                        detail="no path in state file",
                    )
                )
                raise ProjectPathMissing(operation.value, name)
            result = await self._executor.run(
                self._layout.platform_cli,
                [operation.value],
                cwd=project.path,
            )
            await self._finish(operation, name, result)
            updated = await self._store.update(name, enabled=enabled)
        return updated or project

    async def _finish(self, operation: Operation, name: str, result: CommandResult) -> None:
        """Journal the outcome, raising if the command failed."""
        await self._record(
            OperationEvent(
                project=name,
                operation=operation,
                outcome=Outcome.SUCCEEDED if result.ok else Outcome.FAILED,
                exit_code=result.exit_code,
                detail="" if result.ok else result.stderr,
            )
        )
        if not result.ok:
            raise CommandFailed(operation.value, result.exit_code, result.stderr)

    async def _record(self, event: OperationEvent) -> None:
        if self._journal is None:
            return
        try:
            await self._journal.append(event)
        except Exception:
            log.exception("failed to journal %s of %s", event.operation.value, event.project)
