"""Aggregated report document built from the winning selection."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from gtest_harvest.core.exceptions import MissingPlatformError
from gtest_harvest.core.models import HarvestResult, RepositoryTarget
from gtest_harvest.core.platforms import REQUIRED_PLATFORMS, missing_platforms
from gtest_harvest.parsers.gtest import extract_rows
from gtest_harvest.summary import summarize_platform

MODE_GITHUB = "github-artifacts"
MODE_LOCAL_FALLBACK = "local-fallback"


def aggregate_platform_reports(
    reports_by_platform: Mapping[str, dict[str, Any]],
) -> dict[str, Any]:
    """Build the ``summary``, ``tests`` and ``raw`` sections.

    Raises:
        MissingPlatformError: If a required platform has no report.
    """
    missing = missing_platforms(reports_by_platform)
    if missing:
        raise MissingPlatformError(missing)

    tests = []
    summary = []
    for platform in REQUIRED_PLATFORMS:
        report = reports_by_platform[platform]
        rows = extract_rows(report, platform)
        tests.extend(rows)
        summary.append(summarize_platform(platform, rows, report.get("timestamp")))

    return {
        "summary": [s.to_dict() for s in summary],
        "tests": [row.to_dict() for row in tests],
        "raw": {platform: reports_by_platform[platform] for platform in REQUIRED_PLATFORMS},
    }


def build_report(
    result: HarvestResult,
    repositories: list[RepositoryTarget],
    base_commits: Mapping[str, str],
    max_age_days: int,
    fetched_at: datetime,
) -> dict[str, Any]:
    """Assemble the output document for a selection found on GitHub."""
    selection = result.selection
    repository = selection.repository
    actions = selection.actions
    selected_scan = result.selected

    return {
        "source": {
            "owner": repository.owner,
            "repo": repository.name,
            "commitSha": selection.commit.sha,
            "baseCommitSha": base_commits.get(repository.key),
            "maxCommitAgeDays": max_age_days,
            "mode": MODE_GITHUB,
            "repositories": [r.key for r in repositories],
            "fetchedAt": fetched_at.isoformat(),
        },
        "commit": {"repository": repository.key, **selection.commit.to_dict()},
        "actions": {
            "repository": repository.key,
            "selectedBuildRun": (
                actions.selected_build_run.to_dict() if actions.selected_build_run else None
            ),
            "artifacts": [a.to_dict() for a in actions.artifacts],
            "scannedCommitCount": selected_scan.scanned_commit_count,
            "commits": [c.to_dict() for c in selected_scan.commits],
            "scannedRepositories": [scan.to_dict() for scan in result.scans],
        },
        **aggregate_platform_reports(actions.reports_by_platform),
    }


def build_snapshot_report(
    reports_by_platform: Mapping[str, dict[str, Any]],
    repository: RepositoryTarget,
    commit_sha: str,
    repositories: list[RepositoryTarget],
    max_age_days: int,
    fetched_at: datetime,
) -> dict[str, Any]:
    """Assemble the output document from local snapshot reports."""
    return {
        "source": {
            "owner": repository.owner,
            "repo": repository.name,
            "commitSha": commit_sha,
            "baseCommitSha": commit_sha,
            "maxCommitAgeDays": max_age_days,
            "mode": MODE_LOCAL_FALLBACK,
            "repositories": [r.key for r in repositories],
            "fetchedAt": fetched_at.isoformat(),
        },
        "commit": None,
        "actions": None,
        **aggregate_platform_reports(reports_by_platform),
    }
