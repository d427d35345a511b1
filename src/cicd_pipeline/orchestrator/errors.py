"""Error taxonomy for the setup orchestrator.

Every error raised by the external-call wrappers derives from :class:`SetupError`.
The orchestrator catches them at mode boundaries and turns them into messages and
an exit code; nothing here is meant to escape ``main()``.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for orchestrator errors."""


class ExternalCommandFailed(SetupError):
    """An external CLI exited non-zero."""

    def __init__(self, argv: list[str], returncode: int, detail: str) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.detail = detail.strip()
        super().__init__(self.detail or f"{argv[0]} exited with status {returncode}")

    @property
    def command(self) -> str:
        return " ".join(self.argv[:3])


class ToolNotFound(SetupError):
    """A required executable is not on PATH."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Required tool not found on PATH: {tool}")


class AuthenticationRequired(SetupError):
    """The secret-store CLI has no valid session."""


class NotAGitRepository(SetupError):
    """The working directory is not inside a git work tree."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class InvalidSecretValue(SetupError):
    """A submitted value failed its definition's format check."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class SecretSetFailed(SetupError):
    """Writing a single secret to the store failed."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Failed to set {name}: {detail}")
