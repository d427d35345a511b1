"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from cicd_pipeline.orchestrator.commands import CommandResult
from cicd_pipeline.orchestrator.github.secret_store import GitHubSecretStore
from cicd_pipeline.orchestrator.service import SecretsOrchestrator
from cicd_pipeline.orchestrator.vcs import GitRepository


@dataclass
class Call:
    argv: list[str]
    input: str | None
    cwd: Path | None


@dataclass
class FakeRunner:
    """Records every command and answers from a table of canned results.

    Handlers are matched on the longest argv prefix.
    """

    handlers: dict[tuple[str, ...], Callable[[list[str]], CommandResult]] = field(
        default_factory=dict
    )
    installed: set[str] = field(default_factory=lambda: {"gh", "git"})
    calls: list[Call] = field(default_factory=list)

    def on(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.handlers[prefix] = lambda argv: CommandResult(
            argv=argv, returncode=returncode, stdout=stdout, stderr=stderr
        )

    def run(
        self, argv: list[str], *, input: str | None = None, cwd: Path | None = None
    ) -> CommandResult:
        self.calls.append(Call(argv=list(argv), input=input, cwd=cwd))
        best: tuple[str, ...] | None = None
        for prefix in self.handlers:
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return CommandResult(argv=list(argv), returncode=0)
        return self.handlers[best](list(argv))

    def which(self, tool: str) -> str | None:
        return f"/usr/bin/{tool}" if tool in self.installed else None

    def secrets(self, *names: str) -> None:
        self.on("gh", "secret", "list", stdout=secret_list_json(*names))

    def argvs(self, *prefix: str) -> list[list[str]]:
        return [c.argv for c in self.calls if tuple(c.argv[: len(prefix)]) == prefix]


class ScriptedPrompt:
    """Answers prompts in order and remembers what was asked."""

    def __init__(self, answers: list[str]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []

    def __call__(self, text: str) -> str:
        self.asked.append(text)
        return self._answers.pop(0) if self._answers else ""


def secret_list_json(*names: str) -> str:
    return json.dumps([{"name": n} for n in names])


@pytest.fixture
def runner() -> FakeRunner:
    fake = FakeRunner()
    fake.on("gh", "auth", "status", stdout="Logged in to github.com")
    fake.secrets()
    return fake


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)


@pytest.fixture
def make_orchestrator(
    runner: FakeRunner, tmp_path: Path, fixed_clock: Callable[[], datetime]
) -> Callable[..., SecretsOrchestrator]:
    def _make(answers: list[str] | None = None, **kwargs: object) -> SecretsOrchestrator:
        return SecretsOrchestrator(
            store=GitHubSecretStore(runner=runner),
            git=GitRepository(runner=runner, path=tmp_path),
            prompt=ScriptedPrompt(answers or []),
            clock=fixed_clock,
            **kwargs,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture
def scripted_prompt() -> type[ScriptedPrompt]:
    return ScriptedPrompt
