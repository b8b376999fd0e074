"""Build run selection for a single commit."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gtest_harvest.core.models import BuildRun, CommitActions, RepositoryTarget
from gtest_harvest.harvest.artifacts import resolve_artifacts

if TYPE_CHECKING:
    from gtest_harvest.integrations.github_api import GitHubClient

_BUILD_PATTERN = re.compile("build", re.IGNORECASE)


def is_build_run(run: BuildRun) -> bool:
    """Check if the run's name or display title mentions a build."""
    return bool(
        _BUILD_PATTERN.search(run.name or "") or _BUILD_PATTERN.search(run.workflow_title or "")
    )


def pick_build_run(runs: list[BuildRun]) -> BuildRun | None:
    """Choose the run representing a commit's build.

    Build-like runs are preferred, falling back to every run when none
    match. Among the candidates the first successful run wins, otherwise
    the first candidate in listing order.
    """
    if not runs:
        return None
    candidates = [run for run in runs if is_build_run(run)] or runs
    return next((run for run in candidates if run.conclusion == "success"), candidates[0])


async def fetch_actions_for_commit(
    client: GitHubClient,
    repository: RepositoryTarget,
    sha: str,
) -> CommitActions:
    """Resolve the build run, artifacts and platform reports of one commit.

    Commits without any workflow run produce an empty result.
    """
    runs = await client.list_runs_for_commit(repository.owner, repository.name, sha)
    build_run = pick_build_run(runs)
    if build_run is None:
        return CommitActions(runs=runs)

    artifacts, reports_by_platform = await resolve_artifacts(client, repository, build_run.id)
    return CommitActions(
        runs=runs,
        selected_build_run=build_run,
        artifacts=artifacts,
        reports_by_platform=reports_by_platform,
    )
