"""Deployment secret definitions.

The pipeline needs a small, fixed set of repository secrets. Each definition carries an
optional format check so obviously wrong values are rejected before they reach GitHub.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from cicd_pipeline.orchestrator.errors import InvalidSecretValue

Validator = Callable[[str], str | None]
"""Returns an error reason, or None when the value is acceptable."""

_ROLE_ARN_RE = re.compile(r"^arn:aws[a-z-]*:iam::\d{12}:role/[\w+=,.@/-]+$")
_BUCKET_RE = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
_TABLE_RE = re.compile(r"^[A-Za-z0-9_.-]{3,255}$")


def validate_role_arn(value: str) -> str | None:
    if not _ROLE_ARN_RE.match(value):
        return "expected an IAM role ARN like arn:aws:iam::123456789012:role/name"
    return None


def validate_bucket_name(value: str) -> str | None:
    if not _BUCKET_RE.match(value) or ".." in value:
        return "expected an S3 bucket name (3-63 lowercase letters, digits, '.' or '-')"
    return None


def validate_table_name(value: str) -> str | None:
    if not _TABLE_RE.match(value):
        return "expected a DynamoDB table name (3-255 of A-Z a-z 0-9 _ . -)"
    return None


@dataclass(frozen=True, slots=True)
class SecretDefinition:
    name: str
    required: bool
    description: str
    validator: Validator | None = None

    def validate(self, value: str) -> None:
        if self.validator is None:
            return
        reason = self.validator(value)
        if reason is not None:
            raise InvalidSecretValue(self.name, reason)


@dataclass(frozen=True, slots=True)
class SecretValue:
    """A value on its way to the store. Never persisted locally."""

    name: str
    value: str

    def __repr__(self) -> str:
        return f"SecretValue(name={self.name!r}, value='***')"


# Prompt order matters: required secrets first, optional last.
DEFAULT_SECRETS: tuple[SecretDefinition, ...] = (
    SecretDefinition(
        name="AWS_ROLE_ARN",
        required=True,
        description="IAM role assumed by GitHub Actions through OIDC",
        validator=validate_role_arn,
    ),
    SecretDefinition(
        name="TF_STATE_BUCKET",
        required=True,
        description="S3 bucket holding Terraform remote state",
        validator=validate_bucket_name,
    ),
    SecretDefinition(
        name="TF_STATE_LOCK_TABLE",
        required=True,
        description="DynamoDB table used for Terraform state locking",
        validator=validate_table_name,
    ),
    SecretDefinition(
        name="SNYK_TOKEN",
        required=False,
        description="Snyk API token for dependency scanning (optional)",
    ),
)


def load_secrets_file(path: Path) -> dict[str, str]:
    """Read ``NAME=value`` pairs from a dotenv file.

    A name without a value (``NAME`` or ``NAME=``) maps to an empty string, so it is
    skipped like an empty prompt answer.
    """

    if not path.is_file():
        raise FileNotFoundError(f"No such file: {path}")
    return {
        name: value or ""
        for name, value in dotenv_values(dotenv_path=path, encoding="utf-8").items()
    }
