"""GitHub repository secrets, driven through the `gh` CLI.

Values are write-only from the caller's point of view: GitHub never returns them, so the
store can only report names.
"""

from __future__ import annotations

import json
import logging

from cicd_pipeline.orchestrator.commands import CommandRunner
from cicd_pipeline.orchestrator.errors import ExternalCommandFailed, SecretSetFailed

logger = logging.getLogger(__name__)


class GitHubSecretStore:
    """Small wrapper around `gh auth` and `gh secret`."""

    def __init__(self, *, runner: CommandRunner, gh_bin: str = "gh", repository: str = "") -> None:
        self._runner = runner
        self._gh = gh_bin
        self._repository = repository.strip()

    @property
    def gh_bin(self) -> str:
        return self._gh

    @property
    def repository(self) -> str:
        return self._repository

    def _repo_args(self) -> list[str]:
        return ["--repo", self._repository] if self._repository else []

    def is_installed(self) -> bool:
        return self._runner.which(self._gh) is not None

    def auth_status(self) -> bool:
        """Return True when `gh` holds a valid session."""

        result = self._runner.run([self._gh, "auth", "status"])
        logger.debug("gh auth status", extra={"returncode": result.returncode})
        return result.ok

    def list_secrets(self) -> list[str]:
        """Return configured secret names in the order GitHub reports them."""

        argv = [self._gh, "secret", "list", *self._repo_args(), "--json", "name"]
        result = self._runner.run(argv).check()

        text = result.stdout.strip()
        if not text:
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ExternalCommandFailed(argv, result.returncode, f"Unexpected output: {e}") from e

        names: list[str] = []
        for item in raw if isinstance(raw, list) else []:
            if isinstance(item, dict) and isinstance(item.get("name"), str):
                names.append(item["name"])
        return names

    def set_secret(self, name: str, value: str) -> None:
        """Create or overwrite one secret.

        The value is fed on stdin so it never shows up in a process listing.
        """

        argv = [self._gh, "secret", "set", name, *self._repo_args()]
        result = self._runner.run(argv, input=value)
        if not result.ok:
            raise SecretSetFailed(name, result.error_text() or f"exit status {result.returncode}")
        logger.info("Secret set", extra={"secret_name": name, "repository": self._repository})
