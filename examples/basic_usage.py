#!/usr/bin/env python3
"""Programmatic secret listing example.

This demonstrates using the orchestrator components directly:

* load settings from `.env`
* check that `gh` is authenticated
* print which required pipeline secrets are still missing

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from cicd_pipeline.orchestrator.commands import SubprocessRunner
from cicd_pipeline.orchestrator.config import SetupSettings
from cicd_pipeline.orchestrator.github.secret_store import GitHubSecretStore
from cicd_pipeline.orchestrator.logging import configure_logging
from cicd_pipeline.orchestrator.secrets import DEFAULT_SECRETS


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report missing pipeline secrets.")
    parser.add_argument("--repo", default="", help='Target repository in the form "owner/repo"')
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = SetupSettings()
    configure_logging(settings.log_level)

    store = GitHubSecretStore(
        runner=SubprocessRunner(),
        gh_bin=settings.gh_bin,
        repository=args.repo or settings.repository,
    )
    if not store.auth_status():
        print("gh is not authenticated; run: gh auth login")
        return 1

    present = set(store.list_secrets())
    missing = [d.name for d in DEFAULT_SECRETS if d.required and d.name not in present]
    optional = [d.name for d in DEFAULT_SECRETS if not d.required and d.name not in present]

    for name in missing:
        print(f"missing: {name}")
    for name in optional:
        print(f"not set (optional): {name}")
    if not missing:
        print("All required pipeline secrets are configured.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
