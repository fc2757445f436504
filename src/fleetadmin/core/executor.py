"""Subprocess execution for external lifecycle commands."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

log = logging.getLogger(__name__)

SPAWN_FAILURE_EXIT_CODE = 127


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Exit status and fully buffered output of one command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandExecutor:
    """Run external commands with a fixed environment.

    The environment is captured once at construction (the process environment
    when none is given); commands never see later changes to ``os.environ``.
    Nonzero exits are returned, not raised.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = MappingProxyType(
            dict(env if env is not None else os.environ)
        )

    @classmethod
    def from_process_environment(cls, extra: Mapping[str, str] | None = None) -> CommandExecutor:
        return cls({**os.environ, **(extra or {})})

    @property
    def env(self) -> Mapping[str, str]:
        return self._env

    async def run(
        self,
        command: str,
        args: Sequence[str] = (),
        cwd: Path | None = None,
    ) -> CommandResult:
        argv = [command, *args]
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(cwd) if cwd is not None else None,
                env=dict(self._env),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            log.warning("could not spawn %s: %s", command, exc)
            return CommandResult(exit_code=SPAWN_FAILURE_EXIT_CODE, stdout="", stderr=str(exc))

        stdout, stderr = await process.communicate()
        exit_code = process.returncode if process.returncode is not None else 0
        result = CommandResult(
            exit_code=exit_code,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        if result.ok:
            log.info("command %s exited 0", " ".join(argv))
        else:
            log.warning(
                "command %s exited %d: %s", " ".join(argv), exit_code, result.stderr.strip()
            )
        return result
