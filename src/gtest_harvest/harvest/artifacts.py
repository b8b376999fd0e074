"""Artifact resolution: download a run's artifacts and map reports to platforms."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from gtest_harvest.core.models import Artifact, RepositoryTarget
from gtest_harvest.core.platforms import detect_platform
from gtest_harvest.logging import get_logger
from gtest_harvest.parsers.gtest import is_gtest_report
from gtest_harvest.utils.archives import iter_json_entries

if TYPE_CHECKING:
    from gtest_harvest.integrations.github_api import GitHubClient

logger = get_logger(__name__)


def parse_report_entries(entries: list[tuple[str, str]]) -> list[tuple[str, dict[str, Any]]]:
    """Keep the archive entries that decode to GoogleTest reports.

    Args:
        entries: (entry_name, text) tuples from an artifact archive.

    Returns:
        (entry_name, report) tuples in archive order.
    """
    reports = []
    for name, text in entries:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("entry_not_json", entry=name)
            continue
        if not is_gtest_report(data):
            logger.debug("entry_not_gtest_report", entry=name)
            continue
        reports.append((name, data))
    return reports


def assign_platform_reports(
    artifact_name: str,
    reports: list[tuple[str, dict[str, Any]]],
    reports_by_platform: dict[str, dict[str, Any]],
) -> None:
    """Store reports under their platform, overwriting earlier ones.

    The artifact name decides the platform; the entry file name is the
    fallback. Reports with no recognizable platform are dropped.
    """
    artifact_platform = detect_platform(artifact_name)
    for file_name, report in reports:
        platform = artifact_platform or detect_platform(file_name)
        if not platform:
            logger.debug("report_platform_unknown", artifact=artifact_name, entry=file_name)
            continue
        reports_by_platform[platform] = report


async def resolve_artifacts(
    client: GitHubClient,
    repository: RepositoryTarget,
    run_id: int,
) -> tuple[list[Artifact], dict[str, dict[str, Any]]]:
    """Download every artifact of a build run and collect platform reports.

    Args:
        client: GitHub client.
        repository: Repository owning the run.
        run_id: Workflow run ID.

    Returns:
        Tuple of (artifacts in listing order, reports keyed by platform).
    """
    artifacts = await client.list_run_artifacts(repository.owner, repository.name, run_id)
    reports_by_platform: dict[str, dict[str, Any]] = {}

    for artifact in artifacts:
        zip_data = await client.download_artifact(repository.owner, repository.name, artifact.id)
        reports = parse_report_entries(iter_json_entries(zip_data))
        assign_platform_reports(artifact.name, reports, reports_by_platform)

    logger.debug(
        "artifacts_resolved",
        repository=repository.key,
        run_id=run_id,
        artifacts=len(artifacts),
        platforms=list(reports_by_platform),
    )
    return artifacts, reports_by_platform
