"""Harvest orchestration: scan GitHub, fall back to snapshots, build the report."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from gtest_harvest.config import Settings
from gtest_harvest.core.exceptions import ConfigurationError
from gtest_harvest.harvest.selector import select_across_repositories
from gtest_harvest.integrations.github_api import GitHubAPIError, GitHubClient
from gtest_harvest.logging import get_logger
from gtest_harvest.report import build_report, build_snapshot_report
from gtest_harvest.snapshots import load_local_snapshots

logger = get_logger(__name__)


def _load_fallback_report(
    settings: Settings,
    snapshot_dir: str,
    fetched_at: datetime,
) -> dict[str, Any]:
    """Build the report from local snapshots of the first repository's baseline."""
    repositories = settings.repositories
    repository = repositories[0]
    commit_sha = settings.base_commits.get(repository.key)
    if not commit_sha:
        raise ConfigurationError(
            f"No baseline commit configured for {repository.key}; cannot locate snapshots"
        )

    reports = load_local_snapshots(snapshot_dir, commit_sha)
    return build_snapshot_report(
        reports,
        repository=repository,
        commit_sha=commit_sha,
        repositories=repositories,
        max_age_days=settings.github_max_commit_age_days,
        fetched_at=fetched_at,
    )


async def harvest(
    settings: Settings,
    client: GitHubClient | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Produce the aggregated report document.

    Args:
        settings: Resolved configuration.
        client: GitHub client (built from the settings token when omitted).
        now: Scan reference time (defaults to the current UTC time).

    Returns:
        JSON-serializable report with source, commit, actions, summary,
        tests and raw sections.

    Raises:
        ConfigurationError: On malformed repositories or unreachable baselines.
        CoverageError: If no repository has a fully covered commit.
        GitHubAPIError: On API failures when no snapshot directory is configured.
    """
    now = now or datetime.now(UTC)
    repositories = settings.repositories
    if not repositories:
        raise ConfigurationError("No target repositories configured")

    base_commits = settings.base_commits
    max_age_days = settings.github_max_commit_age_days
    client = client or GitHubClient(token=settings.github_token)

    try:
        result = await select_across_repositories(
            client,
            repositories,
            base_commits,
            max_age_days,
            now,
        )
    except GitHubAPIError as e:
        if not settings.gtest_snapshot_dir:
            raise
        logger.warning(
            "github_fetch_failed_using_local_fallback",
            error=str(e),
            snapshot_dir=settings.gtest_snapshot_dir,
        )
        return _load_fallback_report(settings, settings.gtest_snapshot_dir, now)

    return build_report(result, repositories, base_commits, max_age_days, now)
