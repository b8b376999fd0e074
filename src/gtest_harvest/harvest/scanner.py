"""Commit window scanning for a single repository."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from gtest_harvest.core.exceptions import ConfigurationError
from gtest_harvest.core.models import (
    Commit,
    CommitScanResult,
    RepositoryScan,
    RepositoryTarget,
    Selection,
)
from gtest_harvest.core.platforms import has_all_platforms
from gtest_harvest.harvest.runs import fetch_actions_for_commit
from gtest_harvest.logging import get_logger
from gtest_harvest.summary import summarize_performance
from gtest_harvest.utils.timestamps import parse_timestamp

if TYPE_CHECKING:
    from gtest_harvest.integrations.github_api import GitHubClient

logger = get_logger(__name__)

DEFAULT_MAX_COMMIT_AGE_DAYS = 90


def select_commit_window(
    commits: list[Commit],
    base_commit_sha: str | None,
    max_age_days: int,
    now: datetime,
) -> list[Commit]:
    """Restrict newest-first history to commits after the baseline and within the age window.

    Args:
        commits: Commit history, newest first.
        base_commit_sha: Commits at or before this one are excluded; None keeps all.
        max_age_days: Oldest allowed author date, in days before ``now``.
        now: Reference time (timezone-aware).

    Returns:
        Eligible commits in history order.

    Raises:
        ConfigurationError: If the baseline is not part of the history.
    """
    candidates = commits
    if base_commit_sha:
        base_index = next(
            (i for i, commit in enumerate(commits) if commit.sha == base_commit_sha), None
        )
        if base_index is None:
            raise ConfigurationError(f"Base commit not found: {base_commit_sha}")
        candidates = commits[:base_index]

    cutoff = now - timedelta(days=max_age_days)
    window = []
    for commit in candidates:
        authored = parse_timestamp(commit.author_date)
        if authored is not None and authored >= cutoff:
            window.append(commit)
    return window


async def scan_repository(
    client: GitHubClient,
    repository: RepositoryTarget,
    base_commit_sha: str | None,
    max_age_days: int,
    now: datetime,
) -> RepositoryScan:
    """Scan a repository's commits newest first for full platform coverage.

    Every eligible commit is recorded in the trail. The first one whose
    reports cover every platform becomes the repository's selection;
    later commits are still recorded but never replace it.
    """
    commits = await client.list_commits(repository.owner, repository.name)
    try:
        window = select_commit_window(commits, base_commit_sha, max_age_days, now)
    except ConfigurationError as e:
        raise ConfigurationError(f"{e} ({repository.key})") from e

    logger.info(
        "repository_scan_started",
        repository=repository.key,
        base_commit=base_commit_sha,
        history=len(commits),
        eligible=len(window),
        max_age_days=max_age_days,
    )

    scan = RepositoryScan(repository=repository, base_commit_sha=base_commit_sha)
    for commit in window:
        actions = await fetch_actions_for_commit(client, repository, commit.sha)
        scan.commits.append(
            CommitScanResult(
                commit=commit,
                runs=tuple(actions.runs),
                selected_build_run=actions.selected_build_run,
                artifacts=tuple(actions.artifacts),
                performance=summarize_performance(actions.reports_by_platform),
            )
        )
        logger.info(
            "commit_scanned",
            repository=repository.key,
            sha=commit.sha,
            platforms=list(actions.reports_by_platform),
        )

        if scan.selection is None and has_all_platforms(actions.reports_by_platform):
            scan.selection = Selection(repository=repository, commit=commit, actions=actions)
            logger.info("commit_selected", repository=repository.key, sha=commit.sha)

    return scan
