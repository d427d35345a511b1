"""Unit tests for the command runner seam."""

from __future__ import annotations

import sys

import pytest

from cicd_pipeline.orchestrator.commands import CommandResult, SubprocessRunner
from cicd_pipeline.orchestrator.errors import ExternalCommandFailed, ToolNotFound


def test_check_raises_with_stderr() -> None:
    result = CommandResult(argv=["git", "push"], returncode=1, stdout="", stderr="rejected\n")

    with pytest.raises(ExternalCommandFailed) as excinfo:
        result.check()

    assert excinfo.value.detail == "rejected"
    assert excinfo.value.command == "git push"


def test_check_falls_back_to_stdout_then_status() -> None:
    assert CommandResult(argv=["x"], returncode=2, stdout="out").error_text() == "out"

    with pytest.raises(ExternalCommandFailed, match="x exited with status 2"):
        CommandResult(argv=["x"], returncode=2).check()


def test_check_returns_self_on_success() -> None:
    result = CommandResult(argv=["gh"], returncode=0, stdout="ok")
    assert result.check() is result


def test_subprocess_runner_feeds_stdin(tmp_path) -> None:
    runner = SubprocessRunner()

    result = runner.run(
        [sys.executable, "-c", "import sys; print(sys.stdin.read().upper())"],
        input="secret",
        cwd=tmp_path,
    )

    assert result.ok
    assert result.stdout.strip() == "SECRET"


def test_subprocess_runner_missing_tool() -> None:
    with pytest.raises(ToolNotFound) as excinfo:
        SubprocessRunner().run(["definitely-not-a-real-tool-4f2a"])

    assert excinfo.value.tool == "definitely-not-a-real-tool-4f2a"


def test_which_reports_missing_tool() -> None:
    assert SubprocessRunner().which("definitely-not-a-real-tool-4f2a") is None
