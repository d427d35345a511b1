"""Unit tests for the gh-backed secret store."""

from __future__ import annotations

import pytest

from cicd_pipeline.orchestrator.errors import ExternalCommandFailed, SecretSetFailed
from cicd_pipeline.orchestrator.github.secret_store import GitHubSecretStore


def test_list_secrets_parses_gh_json(runner) -> None:
    runner.secrets("AWS_ROLE_ARN", "TF_STATE_BUCKET")
    store = GitHubSecretStore(runner=runner)

    assert store.list_secrets() == ["AWS_ROLE_ARN", "TF_STATE_BUCKET"]
    assert runner.calls[-1].argv == ["gh", "secret", "list", "--json", "name"]


def test_repository_is_passed_to_every_secret_command(runner) -> None:
    store = GitHubSecretStore(runner=runner, repository=" acme/app ")

    store.list_secrets()
    store.set_secret("SNYK_TOKEN", "t0k3n")

    assert runner.calls[0].argv == ["gh", "secret", "list", "--repo", "acme/app", "--json", "name"]
    assert runner.calls[1].argv == ["gh", "secret", "set", "SNYK_TOKEN", "--repo", "acme/app"]
    assert runner.calls[1].input == "t0k3n"


def test_list_secrets_empty_output(runner) -> None:
    runner.on("gh", "secret", "list", stdout="")

    assert GitHubSecretStore(runner=runner).list_secrets() == []


def test_list_secrets_failure_carries_tool_error(runner) -> None:
    runner.on("gh", "secret", "list", returncode=1, stderr="could not determine base repo\n")

    with pytest.raises(ExternalCommandFailed) as excinfo:
        GitHubSecretStore(runner=runner).list_secrets()

    assert str(excinfo.value) == "could not determine base repo"
    assert excinfo.value.returncode == 1


def test_list_secrets_rejects_non_json(runner) -> None:
    runner.on("gh", "secret", "list", stdout="AWS_ROLE_ARN\t2025-01-01")

    with pytest.raises(ExternalCommandFailed, match="Unexpected output"):
        GitHubSecretStore(runner=runner).list_secrets()


def test_set_secret_failure(runner) -> None:
    runner.on("gh", "secret", "set", returncode=1)

    with pytest.raises(SecretSetFailed) as excinfo:
        GitHubSecretStore(runner=runner).set_secret("AWS_ROLE_ARN", "x")

    assert excinfo.value.name == "AWS_ROLE_ARN"
    assert "exit status 1" in str(excinfo.value)


def test_auth_status_and_installation(runner) -> None:
    store = GitHubSecretStore(runner=runner, gh_bin="gh")
    assert store.is_installed()
    assert store.auth_status()

    runner.on("gh", "auth", "status", returncode=1)
    assert not store.auth_status()

    assert not GitHubSecretStore(runner=runner, gh_bin="gh-missing").is_installed()
