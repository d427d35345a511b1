"""Thin seam over external CLI invocation.

All calls to `gh` and `git` go through a :class:`CommandRunner`, so tests can swap in a
recording fake and assert exact argv without touching real systems.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from cicd_pipeline.orchestrator.errors import ExternalCommandFailed, ToolNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one external command."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        """Best human-readable failure text the tool produced."""

        return (self.stderr or self.stdout).strip()

    def check(self) -> CommandResult:
        if not self.ok:
            raise ExternalCommandFailed(self.argv, self.returncode, self.error_text())
        return self


class CommandRunner(Protocol):
    """Runs one command to completion and reports its result."""

    def run(
        self, argv: list[str], *, input: str | None = None, cwd: Path | None = None
    ) -> CommandResult: ...

    def which(self, tool: str) -> str | None: ...


class SubprocessRunner:
    """Blocking :mod:`subprocess` implementation.

    No timeout is applied: an unresponsive tool blocks the caller.
    """

    def run(
        self, argv: list[str], *, input: str | None = None, cwd: Path | None = None
    ) -> CommandResult:
        # Only the executable and subcommand are logged; later args may carry user data.
        logger.debug("Running command", extra={"command": " ".join(argv[:3])})
        try:
            completed = subprocess.run(
                argv,
                input=input,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise ToolNotFound(argv[0]) from e

        result = CommandResult(
            argv=list(argv),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if not result.ok:
            logger.debug(
                "Command failed",
                extra={"command": " ".join(argv[:3]), "returncode": result.returncode},
            )
        return result

    def which(self, tool: str) -> str | None:
        return shutil.which(tool)
