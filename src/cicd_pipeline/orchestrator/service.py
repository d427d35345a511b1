"""Secrets/setup orchestration.

One invocation runs exactly one mode to completion:

- list: read secret names from the store (never writes)
- interactive: prompt for each deployment secret and write the non-empty ones
- test: commit and push a timestamped marker file to trigger a pipeline run
- default: list, then print guidance

Every mode except help first requires `gh` on PATH and an authenticated session. Errors
from external tools are caught here, at the mode boundary, and reported; the return
value of :meth:`SecretsOrchestrator.run` is the process exit code.
"""

from __future__ import annotations

import getpass
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from cicd_pipeline.orchestrator.config import Mode, RunConfig
from cicd_pipeline.orchestrator.errors import (
    AuthenticationRequired,
    ExternalCommandFailed,
    InvalidSecretValue,
    NotAGitRepository,
    SecretSetFailed,
    SetupError,
    ToolNotFound,
)
from cicd_pipeline.orchestrator.github.secret_store import GitHubSecretStore
from cicd_pipeline.orchestrator.logging import register_secret
from cicd_pipeline.orchestrator.secrets import (
    DEFAULT_SECRETS,
    SecretDefinition,
    SecretValue,
    load_secrets_file,
)
from cicd_pipeline.orchestrator.vcs import GitRepository

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class OperationResult:
    secret_name: str
    success: bool
    message: str


@dataclass(frozen=True, slots=True)
class SetupSummary:
    """Aggregate of one interactive configuration pass.

    Skipped (empty) definitions are not part of ``total``.
    """

    results: tuple[OperationResult, ...] = ()
    skipped: tuple[SecretDefinition, ...] = ()

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def skipped_required(self) -> list[str]:
        return [d.name for d in self.skipped if d.required]

    def line(self) -> str:
        return f"{self.succeeded}/{self.total} secrets configured successfully"


@dataclass(frozen=True, slots=True)
class PipelineTestRun:
    marker_file_name: str
    commit_message: str
    pushed: bool = False


class SecretsOrchestrator:
    """Dispatches one mode against the secret store and the local git tree."""

    def __init__(
        self,
        *,
        store: GitHubSecretStore,
        git: GitRepository,
        definitions: Sequence[SecretDefinition] = DEFAULT_SECRETS,
        prompt: Prompt | None = None,
        clock: Callable[[], datetime] | None = None,
        marker_prefix: str = "pipeline-test",
        docs_path: str = "docs/SECRETS.md",
    ) -> None:
        self._store = store
        self._git = git
        self._definitions = tuple(definitions)
        self._prompt = prompt or getpass.getpass
        self._clock = clock or (lambda: datetime.now(UTC))
        self._marker_prefix = marker_prefix
        self._docs_path = docs_path

    def run(self, config: RunConfig, *, help_text: str = "") -> int:
        if config.mode is Mode.HELP:
            print(help_text.rstrip())
            return 0

        if config.requires_auth:
            try:
                self.check_preconditions()
            except ToolNotFound as e:
                print(f"Error: {e}")
                print("Install the GitHub CLI from https://cli.github.com/ and try again.")
                return 1
            except AuthenticationRequired as e:
                print(f"Error: {e}")
                print("Run: gh auth login")
                return 1

        logger.info("Entering mode", extra={"mode": config.mode.value})

        if config.mode is Mode.LIST:
            return self.list_mode()
        if config.mode is Mode.INTERACTIVE:
            values = None
            if config.secrets_file is not None:
                try:
                    values = load_secrets_file(config.secrets_file)
                except (OSError, ValueError) as e:
                    print(f"Error: cannot read secrets file: {e}")
                    return 1
            return self.interactive_mode(values)
        if config.mode is Mode.TEST:
            return self.test_mode()
        if config.mode is Mode.DEFAULT:
            return self.default_mode()

        logger.error("Unsupported mode", extra={"mode": config.mode.value})
        return 2

    def check_preconditions(self) -> None:
        """Fail fast unless `gh` is installed and authenticated."""

        if not self._store.is_installed():
            raise ToolNotFound(self._store.gh_bin)
        if not self._store.auth_status():
            raise AuthenticationRequired("GitHub CLI is not authenticated")

    def list_mode(self) -> int:
        try:
            names = self._store.list_secrets()
        except ExternalCommandFailed as e:
            logger.warning("Listing secrets failed", extra={"returncode": e.returncode})
            print(f"Error: could not list secrets: {e}")
            return 1
        except SetupError as e:
            print(f"Error: could not list secrets: {e}")
            return 1

        if not names:
            print("No secrets configured.")
        else:
            print("Configured secrets:")
            for name in names:
                print(f"  - {name}")

        present = set(names)
        missing = [d.name for d in self._definitions if d.required and d.name not in present]
        if missing:
            print(f"Warning: missing required secrets: {', '.join(missing)}", file=sys.stderr)
        return 0

    def _read_value(self, definition: SecretDefinition) -> str:
        suffix = "" if definition.required else " [optional, Enter to skip]"
        try:
            return self._prompt(f"{definition.name} - {definition.description}{suffix}: ")
        except EOFError:
            return ""

    def collect(
        self, values: Mapping[str, str] | None = None
    ) -> list[SecretValue | SecretDefinition]:
        """Gather one entry per definition: a value to send, or the definition when skipped."""

        collected: list[SecretValue | SecretDefinition] = []
        for definition in self._definitions:
            if values is None:
                raw = self._read_value(definition)
            else:
                raw = values.get(definition.name, "")
            if not raw.strip():
                collected.append(definition)
            else:
                collected.append(SecretValue(name=definition.name, value=raw.strip()))
        return collected

    def configure(self, values: Mapping[str, str] | None = None) -> SetupSummary:
        """Write every non-empty value; one failure never stops the rest."""

        by_name = {d.name: d for d in self._definitions}
        results: list[OperationResult] = []
        skipped: list[SecretDefinition] = []

        for entry in self.collect(values):
            if isinstance(entry, SecretDefinition):
                print(f"Skipping {entry.name} (no value provided)")
                skipped.append(entry)
                continue

            try:
                by_name[entry.name].validate(entry.value)
                register_secret(entry.value)
                self._store.set_secret(entry.name, entry.value)
            except (InvalidSecretValue, SecretSetFailed) as e:
                logger.warning(
                    "Secret not configured", extra={"secret_name": entry.name, "detail": str(e)}
                )
                results.append(OperationResult(entry.name, False, str(e)))
                print(f"  x {e}")
            except ToolNotFound as e:
                results.append(OperationResult(entry.name, False, str(e)))
                print(f"  x {entry.name}: {e}")
            else:
                results.append(OperationResult(entry.name, True, "configured"))
                print(f"  + {entry.name} configured")

        return SetupSummary(results=tuple(results), skipped=tuple(skipped))

    def interactive_mode(self, values: Mapping[str, str] | None = None) -> int:
        print("Configuring deployment secrets. Leave a value empty to skip it.")
        summary = self.configure(values)

        print()
        print(summary.line())
        if summary.skipped_required:
            print(f"Warning: required secrets skipped: {', '.join(summary.skipped_required)}")
        logger.info(
            "Interactive setup finished",
            extra={"succeeded": summary.succeeded, "total": summary.total},
        )

        print()
        listed = self.list_mode()
        if summary.succeeded != summary.total:
            return 1
        return listed

    def _marker_path(self, now: datetime) -> Path:
        stem = f"{self._marker_prefix}-{now:%Y%m%d-%H%M%S}"
        candidate = self._git.path / f"{stem}.md"
        n = 1
        while candidate.exists():
            candidate = self._git.path / f"{stem}-{n}.md"
            n += 1
        return candidate

    def exercise_pipeline(self) -> PipelineTestRun:
        """Create, commit and push a marker file.

        Raises:
            NotAGitRepository: the working directory is not a git tree; nothing is written.
            ExternalCommandFailed: add/commit/push failed; not retried.
        """

        if not self._git.is_repository():
            raise NotAGitRepository(str(self._git.path))

        now = self._clock()
        stamp = now.isoformat()
        marker = self._marker_path(now)
        marker.write_text(
            "\n".join(
                [
                    "# Pipeline test",
                    "",
                    f"Triggered at: {stamp}",
                    "",
                    "This file only exists to trigger a CI/CD run. Delete it afterwards.",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        print(f"Created marker file: {marker.name}")

        message = f"test: trigger CI/CD pipeline ({stamp})"
        self._git.add(Path(marker.name))
        self._git.commit(message)
        self._git.push()
        return PipelineTestRun(marker_file_name=marker.name, commit_message=message, pushed=True)

    def test_mode(self) -> int:
        try:
            run = self.exercise_pipeline()
        except NotAGitRepository as e:
            print(f"Error: {e}")
            print("Run this from inside the repository checkout.")
            return 1
        except ExternalCommandFailed as e:
            logger.warning(
                "Pipeline test failed", extra={"command": e.command, "returncode": e.returncode}
            )
            print(f"Error: `{e.command}` failed: {e}")
            return 1
        except SetupError as e:
            print(f"Error: {e}")
            return 1

        print(f"Committed and pushed: {run.commit_message}")
        print()
        print("Monitor the pipeline with:")
        print("  gh run list --limit 5")
        print("  gh run watch")
        print()
        print(f"Remove {run.marker_file_name} once the run has finished.")
        return 0

    def default_mode(self) -> int:
        code = self.list_mode()
        print()
        print("Next steps:")
        print("  Configure secrets:       cicd-setup --interactive")
        print("  Exercise the pipeline:   cicd-setup --test")
        print(f"  Documentation:           {self._docs_path}")
        return code
