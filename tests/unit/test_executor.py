import sys
from pathlib import Path

import pytest

from fleetadmin.core.executor import SPAWN_FAILURE_EXIT_CODE, CommandExecutor


@pytest.mark.asyncio
async def test_run_captures_output_and_exit_code(tmp_path: Path) -> None:
    executor = CommandExecutor()
    result = await executor.run(
        sys.executable,
        ["-c", "import sys; print('out'); print('boom', file=sys.stderr); sys.exit(3)"],
        cwd=tmp_path,
    )
    assert result.exit_code == 3
    assert result.ok is False
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "boom"


@pytest.mark.asyncio
async def test_run_uses_working_directory(tmp_path: Path) -> None:
    result = await CommandExecutor().run(
        sys.executable, ["-c", "import os; print(os.getcwd())"], cwd=tmp_path
    )
    assert result.ok
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


@pytest.mark.asyncio
async def test_environment_is_fixed_at_construction(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEET_MARKER", "before")
    executor = CommandExecutor.from_process_environment({"FLEET_EXTRA": "extra"})
    monkeypatch.setenv("FLEET_MARKER", "after")

    result = await executor.run(
        sys.executable,
        ["-c", "import os; print(os.environ['FLEET_MARKER'], os.environ['FLEET_EXTRA'])"],
    )
    assert result.stdout.split() == ["before", "extra"]

    with pytest.raises(TypeError):
        executor.env["FLEET_MARKER"] = "mutated"  # type: ignore[index]


@pytest.mark.asyncio
async def test_spawn_failure_is_reported_not_raised(tmp_path: Path) -> None:
    result = await CommandExecutor().run(str(tmp_path / "no-such-binary"))
    assert result.exit_code == SPAWN_FAILURE_EXIT_CODE
    assert "no-such-binary" in result.stderr


@pytest.mark.asyncio
async def test_run_passes_arguments_without_shell(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    class _Process:
        returncode = 0

        async def communicate(self) -> tuple[bytes, bytes]:
            return (b"ok", b"")

    async def fake_create_subprocess_exec(*command: str, **kwargs: object) -> _Process:
        seen["command"] = command
        seen.update(kwargs)
        return _Process()

    monkeypatch.setattr(
        "fleetadmin.core.executor.asyncio.create_subprocess_exec",
        fake_create_subprocess_exec,
    )

    executor = CommandExecutor({"PATH": "/usr/bin"})
    result = await executor.run("bash", ["create-project.sh", "acme; rm -rf /"])

    assert result.ok
    assert result.stdout == "ok"
    assert seen["command"] == ("bash", "create-project.sh", "acme; rm -rf /")
    assert seen["env"] == {"PATH": "/usr/bin"}
    assert seen["cwd"] is None
