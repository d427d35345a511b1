"""Configuration for the secrets/setup orchestrator.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Nothing here is a secret: deployment secret values are only ever read from the
terminal (or an explicit `--from-file`) and handed straight to `gh`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def normalize_repository(value: str) -> str:
    """Strip *value* and require the `owner/repo` shape; empty is allowed."""

    value = value.strip()
    if value and (value.count("/") != 1 or value.startswith("/") or value.endswith("/")):
        raise ValueError(f"repository must look like 'owner/repo', got {value!r}")
    return value


class SetupSettings(BaseSettings):
    """Settings for the setup CLI.

    Environment variables:
    - LOG_LEVEL           (optional)
    - CICD_GH_BIN         (optional)
    - CICD_GIT_BIN        (optional)
    - CICD_REPOSITORY     (optional, 'owner/repo')
    - CICD_WORKDIR        (optional)
    - CICD_MARKER_PREFIX  (optional)
    - CICD_DOCS_PATH      (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `SetupSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level (logs go to stderr)",
    )

    gh_bin: str = Field(
        default="gh",
        validation_alias="CICD_GH_BIN",
        description="GitHub CLI executable",
    )
    git_bin: str = Field(
        default="git",
        validation_alias="CICD_GIT_BIN",
        description="Git executable",
    )

    repository: str = Field(
        default="",
        validation_alias="CICD_REPOSITORY",
        description=(
            "Target repository in the form 'owner/repo'. Empty means gh picks the "
            "repository of the current checkout."
        ),
    )

    workdir: Path = Field(
        default=Path("."),
        validation_alias="CICD_WORKDIR",
        description="Working tree where pipeline marker files are committed",
    )
    marker_prefix: str = Field(
        default="pipeline-test",
        validation_alias="CICD_MARKER_PREFIX",
        description="Filename prefix for pipeline marker files",
    )

    docs_path: str = Field(
        default="docs/SECRETS.md",
        validation_alias="CICD_DOCS_PATH",
        description="Documentation pointer printed in the default guidance text",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.upper() not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return value.upper()

    @field_validator("repository")
    @classmethod
    def _owner_repo(cls, value: str) -> str:
        return normalize_repository(value)


class Mode(str, enum.Enum):
    HELP = "help"
    LIST = "list"
    INTERACTIVE = "interactive"
    TEST = "test"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """One invocation's choices, built once from parsed arguments."""

    mode: Mode
    repository: str = ""
    secrets_file: Path | None = None

    @property
    def requires_auth(self) -> bool:
        return self.mode is not Mode.HELP
