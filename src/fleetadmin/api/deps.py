"""Shared API dependency providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from fleetadmin.config import Settings, get_settings
from fleetadmin.core.auth import SessionSigner
from fleetadmin.core.executor import CommandExecutor
from fleetadmin.core.lifecycle import CommandLayout, LifecycleCoordinator
from fleetadmin.core.locks import ProjectLocks
from fleetadmin.db.journal import OperationJournal
from fleetadmin.db.state import ProjectStateStore

_PROJECT_LOCKS = ProjectLocks()


@lru_cache
def _store_for(path: Path) -> ProjectStateStore:
    return ProjectStateStore(path)


@lru_cache
def _default_executor() -> CommandExecutor:
    return CommandExecutor.from_process_environment()


def get_store(settings: Settings = Depends(get_settings)) -> ProjectStateStore:
    return _store_for(settings.state_path)


def get_journal(settings: Settings = Depends(get_settings)) -> OperationJournal:
    return OperationJournal(db_path=settings.journal_path)


def get_executor() -> CommandExecutor:
    return _default_executor()


def get_session_signer(settings: Settings = Depends(get_settings)) -> SessionSigner:
    return SessionSigner(settings.session_secret)


def get_coordinator(
    settings: Settings = Depends(get_settings),
    store: ProjectStateStore = Depends(get_store),
    executor: CommandExecutor = Depends(get_executor),
    journal: OperationJournal = Depends(get_journal),
) -> LifecycleCoordinator:
    return LifecycleCoordinator(
        store=store,
        executor=executor,
        layout=CommandLayout(
            root_dir=settings.root_dir,
            scripts_dir=settings.scripts_dir,
            backup_log_dir=settings.backup_log_dir,
            platform_cli=settings.platform_cli,
            shell=settings.shell,
        ),
        locks=_PROJECT_LOCKS,
        journal=journal,
    )
