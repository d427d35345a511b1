"""Git operations used to exercise the pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from cicd_pipeline.orchestrator.commands import CommandRunner

logger = logging.getLogger(__name__)


class GitRepository:
    """Runs `git` against a fixed working directory."""

    def __init__(self, *, runner: CommandRunner, path: Path, git_bin: str = "git") -> None:
        self._runner = runner
        self.path = path
        self._git = git_bin

    def _git_cmd(self, *args: str) -> list[str]:
        return [self._git, *args]

    def is_repository(self) -> bool:
        result = self._runner.run(self._git_cmd("rev-parse", "--git-dir"), cwd=self.path)
        return result.ok

    def add(self, path: Path) -> None:
        self._runner.run(self._git_cmd("add", str(path)), cwd=self.path).check()

    def commit(self, message: str) -> None:
        self._runner.run(self._git_cmd("commit", "-m", message), cwd=self.path).check()

    def push(self) -> None:
        self._runner.run(self._git_cmd("push"), cwd=self.path).check()
        logger.info("Pushed to upstream", extra={"path": str(self.path)})
