"""Selection of the newest fully covered commit across repositories."""

from __future__ import annotations

from datetime import datetime
from functools import cmp_to_key
from typing import TYPE_CHECKING

from gtest_harvest.core.exceptions import CoverageError
from gtest_harvest.core.models import HarvestResult, RepositoryScan, RepositoryTarget
from gtest_harvest.harvest.scanner import scan_repository
from gtest_harvest.logging import get_logger
from gtest_harvest.utils.timestamps import parse_timestamp

if TYPE_CHECKING:
    from gtest_harvest.integrations.github_api import GitHubClient

logger = get_logger(__name__)


def _compare_newest_first(a: RepositoryScan, b: RepositoryScan) -> int:
    """Order by selection author date, newest first; unparseable dates compare equal."""
    da = parse_timestamp(a.selection.commit.author_date) if a.selection else None
    db = parse_timestamp(b.selection.commit.author_date) if b.selection else None
    if da is None or db is None:
        return 0
    return (db > da) - (db < da)


def pick_newest_selection(scans: list[RepositoryScan]) -> RepositoryScan | None:
    """Pick the scan whose selection was authored most recently.

    Scans without a selection are ignored. Ties keep configured order.
    """
    selected = [scan for scan in scans if scan.selection is not None]
    if not selected:
        return None
    return sorted(selected, key=cmp_to_key(_compare_newest_first))[0]


async def select_across_repositories(
    client: GitHubClient,
    repositories: list[RepositoryTarget],
    base_commits: dict[str, str],
    max_age_days: int,
    now: datetime,
) -> HarvestResult:
    """Scan every repository in order and pick the newest selection.

    Raises:
        CoverageError: If no repository has a fully covered commit in the window.
    """
    scans = []
    for repository in repositories:
        scan = await scan_repository(
            client,
            repository,
            base_commits.get(repository.key),
            max_age_days,
            now,
        )
        scans.append(scan)

    picked = pick_newest_selection(scans)
    if picked is None:
        raise CoverageError([r.key for r in repositories], max_age_days)

    logger.info(
        "repository_selected",
        repository=picked.repository.key,
        sha=picked.selection.commit.sha if picked.selection else None,
    )
    return HarvestResult(selected=picked, scans=scans)
