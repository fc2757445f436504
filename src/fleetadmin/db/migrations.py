"""SQLite migrations for the operation journal."""

from __future__ import annotations

import aiosqlite

SCHEMA_VERSION = 1


async def apply_migrations(conn: aiosqlite.Connection) -> None:
    """Create the journal schema if missing and record its version."""
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS operation_events (
            id TEXT PRIMARY KEY,
            project TEXT NOT NULL,
            operation TEXT NOT NULL,
            outcome TEXT NOT NULL,
            exit_code INTEGER,
            detail TEXT NOT NULL,
            timestamp TEXT NOT NULL
        )
        """
    )
    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_operation_events_project ON operation_events(project)"
    )

    await conn.execute("DELETE FROM schema_migrations")
    await conn.execute("INSERT INTO schema_migrations(version) VALUES (?)", (SCHEMA_VERSION,))
    await conn.commit()
