from pathlib import Path

import pytest

from fleetadmin.db.journal import MAX_DETAIL_CHARS, OperationJournal
from fleetadmin.models.events import Operation, OperationEvent, Outcome


@pytest.mark.asyncio
async def test_journal_filters_by_project_and_operation(tmp_path: Path) -> None:
    journal = OperationJournal(tmp_path / "state" / "journal.db")
    for project, operation in [
        ("acme", Operation.CREATE),
        ("acme", Operation.BACKUP),
        ("beta", Operation.BACKUP),
    ]:
        await journal.append(
            OperationEvent(
                project=project,
                operation=operation,
                outcome=Outcome.SUCCEEDED,
                exit_code=0,
            )
        )

    assert len(await journal.list_events()) == 3
    acme = await journal.list_events(project="acme")
    assert [event.operation for event in acme] == [Operation.CREATE, Operation.BACKUP]
    backups = await journal.list_events(operation=Operation.BACKUP)
    assert {event.project for event in backups} == {"acme", "beta"}
    latest = await journal.list_events(limit=1)
    assert latest[0].project == "beta"


@pytest.mark.asyncio
async def test_journal_truncates_long_detail(tmp_path: Path) -> None:
    journal = OperationJournal(tmp_path / "journal.db")
    await journal.append(
        OperationEvent(
            project="acme",
            operation=Operation.DESTROY,
            outcome=Outcome.FAILED,
            exit_code=1,
            detail="x" * (MAX_DETAIL_CHARS + 10) + "tail",
        )
    )
    (event,) = await journal.list_events(project="acme")
    assert len(event.detail) == MAX_DETAIL_CHARS
    assert event.detail.endswith("tail")
