"""CLI entrypoint for deployment secret setup.

Modes are plain switches; when several are given the first in this order wins:
help, list, interactive, test. With no switch the default mode lists secrets and
prints guidance.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cicd_pipeline import __version__
from cicd_pipeline.orchestrator.commands import CommandRunner, SubprocessRunner
from cicd_pipeline.orchestrator.config import Mode, RunConfig, SetupSettings, normalize_repository
from cicd_pipeline.orchestrator.github.secret_store import GitHubSecretStore
from cicd_pipeline.orchestrator.logging import configure_logging
from cicd_pipeline.orchestrator.service import Prompt, SecretsOrchestrator
from cicd_pipeline.orchestrator.vcs import GitRepository

logger = logging.getLogger(__name__)

# Precedence for mutually exclusive mode switches.
_MODE_ORDER: tuple[Mode, ...] = (Mode.HELP, Mode.LIST, Mode.INTERACTIVE, Mode.TEST)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cicd-setup",
        description="Configure and verify the GitHub Actions secrets used by the CI/CD pipeline.",
        epilog=(
            "Exit codes: 0 success, 1 setup/authentication error, 2 configuration error.\n"
            "Requires an authenticated GitHub CLI (gh auth login)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help", "-Help", dest="help", action="store_true", help="Show this help and exit"
    )
    parser.add_argument(
        "--list", "-List", dest="list", action="store_true", help="List configured secret names"
    )
    parser.add_argument(
        "--interactive",
        "-Interactive",
        dest="interactive",
        action="store_true",
        help="Prompt for AWS_ROLE_ARN, TF_STATE_BUCKET, TF_STATE_LOCK_TABLE and SNYK_TOKEN",
    )
    parser.add_argument(
        "--test",
        "-Test",
        dest="test",
        action="store_true",
        help="Commit and push a timestamped marker file to trigger a pipeline run",
    )
    parser.add_argument(
        "--from-file",
        dest="secrets_file",
        default=None,
        help="With --interactive: read NAME=value pairs from this file instead of prompting",
    )
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help=(
            "Target repository in the form 'owner/repo' "
            "(defaults to CICD_REPOSITORY, then to gh's own default)"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"cicd-pipeline-kit {__version__}"
    )
    return parser


def select_mode(args: argparse.Namespace) -> Mode:
    for mode in _MODE_ORDER:
        if getattr(args, mode.value, False):
            return mode
    return Mode.DEFAULT


def build_run_config(args: argparse.Namespace, settings: SetupSettings) -> RunConfig:
    repository = (args.repository or settings.repository).strip()
    return RunConfig(
        mode=select_mode(args),
        repository=repository,
        secrets_file=Path(args.secrets_file) if args.secrets_file else None,
    )


def main(
    argv: list[str] | None = None,
    *,
    runner: CommandRunner | None = None,
    prompt: Prompt | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    mode = select_mode(args)

    # Help needs neither settings nor gh.
    if mode is Mode.HELP:
        parser.print_help()
        return 0

    if args.secrets_file and mode is not Mode.INTERACTIVE:
        parser.error("--from-file requires --interactive")
    if args.repository is not None:
        try:
            args.repository = normalize_repository(args.repository)
        except ValueError as e:
            parser.error(f"--repo: {e}")

    try:
        settings = SetupSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    config = build_run_config(args, settings)

    runner = runner or SubprocessRunner()
    orchestrator = SecretsOrchestrator(
        store=GitHubSecretStore(
            runner=runner, gh_bin=settings.gh_bin, repository=config.repository
        ),
        git=GitRepository(runner=runner, path=settings.workdir, git_bin=settings.git_bin),
        prompt=prompt,
        marker_prefix=settings.marker_prefix,
        docs_path=settings.docs_path,
    )

    try:
        return orchestrator.run(config)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except Exception:
        logger.exception("Command failed", extra={"mode": config.mode.value})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
