"""Async SQLite journal of lifecycle operations."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from fleetadmin.db.migrations import apply_migrations
from fleetadmin.models.events import Operation, OperationEvent, Outcome

MAX_DETAIL_CHARS = 4000


class OperationJournal:
    """Append-only store of operation outcomes, kept apart from the state file."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self._db_path)
        conn.row_factory = aiosqlite.Row
        try:
            await apply_migrations(conn)
            yield conn
        finally:
            await conn.close()

    async def append(self, event: OperationEvent) -> None:
        async with self.connection() as conn:
            await conn.execute(
                """
                INSERT INTO operation_events(
                    id, project, operation, outcome, exit_code, detail, timestamp
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.project,
                    event.operation.value,
                    event.outcome.value,
                    event.exit_code,
                    event.detail[-MAX_DETAIL_CHARS:],
                    event.timestamp.isoformat(),
                ),
            )
            await conn.commit()

    async def list_events(
        self,
        *,
        project: str | None = None,
        operation: Operation | None = None,
        limit: int | None = None,
    ) -> list[OperationEvent]:
        query = "SELECT * FROM operation_events WHERE 1 = 1"
        params: list[str | int] = []

        if project:
            query += " AND project = ?"
            params.append(project)

        if operation:
            query += " AND operation = ?"
            params.append(operation.value)

        query += " ORDER BY timestamp ASC"

        async with self.connection() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()

        events = [self._event_from_row(row) for row in rows]
        if limit is not None and limit > 0:
            events = events[-limit:]
        return events

    @staticmethod
    def _event_from_row(row: aiosqlite.Row) -> OperationEvent:
        return OperationEvent(
            id=str(row["id"]),
            project=str(row["project"]),
            operation=Operation(str(row["operation"])),
            outcome=Outcome(str(row["outcome"])),
            exit_code=row["exit_code"],
            detail=str(row["detail"]),
            timestamp=datetime.fromisoformat(str(row["timestamp"])),
        )
