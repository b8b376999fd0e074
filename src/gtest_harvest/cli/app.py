"""Main Typer CLI application for gtest-harvest."""

from __future__ import annotations

import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Annotated

import typer

from gtest_harvest.cli.formatters import format_artifact_table, format_report_json
from gtest_harvest.config import load_settings, parse_base_commit_map
from gtest_harvest.core.exceptions import ConfigurationError, HarvestError
from gtest_harvest.core.models import RepositoryTarget
from gtest_harvest.logging import configure_logging, get_logger

app = typer.Typer(
    name="gtest-harvest",
    help="Aggregate cross-platform GoogleTest reports from GitHub Actions artifacts",
    no_args_is_help=True,
)

logger = get_logger(__name__)

# owner/repo=sha
BASE_COMMIT_PATTERN = re.compile(r"^([\w-]+/[\w.-]+)=([0-9a-fA-F]+)$")


def parse_base_commit_options(values: list[str], defaults: dict[str, str]) -> dict[str, str]:
    """Merge ``OWNER/REPO=SHA`` options over the configured baseline map.

    Raises:
        ConfigurationError: If an option is not in OWNER/REPO=SHA form.
    """
    merged = dict(defaults)
    for value in values:
        match = BASE_COMMIT_PATTERN.match(value.strip())
        if not match:
            raise ConfigurationError(f"Invalid base commit: {value}. Expected OWNER/REPO=SHA.")
        merged[match.group(1)] = match.group(2)
    return merged


def _write_output(content: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(content)
        return
    output.write_text(content, encoding="utf-8")
    typer.echo(f"Report saved to: {output}", err=True)


@app.command()
def scan(
    repo: Annotated[
        list[str] | None,
        typer.Option(
            "-r",
            "--repo",
            help="Repository to scan (owner/repo); repeat for several",
        ),
    ] = None,
    base_commit: Annotated[
        list[str] | None,
        typer.Option(
            "-b",
            "--base-commit",
            help="Baseline commit as OWNER/REPO=SHA; repeat for several",
        ),
    ] = None,
    max_age_days: Annotated[
        int | None,
        typer.Option(
            "-d",
            "--max-age-days",
            min=0,
            help="Maximum commit age in days (default: 90)",
        ),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(
            "-t",
            "--token",
            help="GitHub token (or set GITHUB_TOKEN)",
        ),
    ] = None,
    snapshot_dir: Annotated[
        Path | None,
        typer.Option(
            "--snapshot-dir",
            help="Directory of saved reports used if GitHub is unreachable",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "-o",
            "--output",
            help="Write the report to a file instead of stdout",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
    log_json: Annotated[
        bool,
        typer.Option(
            "--log-json",
            help="Emit logs as JSON lines on stderr",
        ),
    ] = False,
) -> None:
    """Find the newest commit with Linux, Windows and macOS reports and aggregate them."""
    from gtest_harvest.service import harvest

    configure_logging(log_level or "INFO", log_json)
    try:
        settings = load_settings(
            github_token=token,
            github_target_repos=",".join(repo) if repo else None,
            github_max_commit_age_days=max_age_days,
            gtest_snapshot_dir=str(snapshot_dir) if snapshot_dir else None,
            log_level=log_level,
            log_json_format=log_json or None,
        )
        configure_logging(settings.log_level, settings.log_json_format)
        if base_commit:
            merged = parse_base_commit_options(base_commit, settings.base_commits)
            settings.github_base_commit_by_repo = json.dumps(merged)

        report = asyncio.run(harvest(settings))
    except HarvestError as e:
        logger.error("harvest_failed", error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    _write_output(format_report_json(report), output)


@app.command("list-artifacts")
def list_artifacts(
    target: Annotated[
        str,
        typer.Argument(help="GitHub repo (owner/repo)"),
    ],
    run_id: Annotated[
        int,
        typer.Argument(help="Workflow run ID"),
    ],
    token: Annotated[
        str | None,
        typer.Option(
            "-t",
            "--token",
            help="GitHub token (or set GITHUB_TOKEN)",
        ),
    ] = None,
) -> None:
    """List a workflow run's artifacts and the platform each maps to."""
    from gtest_harvest.integrations.github_api import GitHubClient

    try:
        settings = load_settings(github_token=token)
        repository = RepositoryTarget.parse(target)
        client = GitHubClient(token=settings.github_token)
        artifacts = asyncio.run(
            client.list_run_artifacts(repository.owner, repository.name, run_id)
        )
    except HarvestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(format_artifact_table(run_id, artifacts), nl=False)


def main() -> None:
    """Entry point for the Typer CLI."""
    app()
