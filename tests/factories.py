"""Test data factories for gtest-harvest tests.

This module provides factory functions and a fake GitHub client.
Use these instead of defining fixtures locally in each test file.

Usage:
    from tests.factories import FakeGitHubClient, make_gtest_report, make_zip

    def test_something():
        report = make_gtest_report(tests=[("Math", "Add", "0.5s", "COMPLETED")])
        archive = make_zip({"results.json": report})
"""

from __future__ import annotations

import io
import json
import zipfile
from datetime import UTC, datetime, timedelta
from typing import Any

from gtest_harvest.core.models import Artifact, BuildRun, Commit

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def iso_days_ago(days: float, now: datetime = NOW) -> str:
    """ISO 8601 timestamp ``days`` before ``now``, GitHub style."""
    return (now - timedelta(days=days)).strftime("%Y-%m-%dT%H:%M:%SZ")


def make_gtest_report(
    tests: list[tuple[str, str, str | None, str | None]] | None = None,
    timestamp: str = "2024-02-28T10:00:00Z",
) -> dict[str, Any]:
    """Create a GoogleTest JSON report.

    Args:
        tests: (suite, test, time, result) tuples; None values are omitted.
        timestamp: Report timestamp.
    """
    if tests is None:
        tests = [("Math", "Add", "0.002s", "COMPLETED")]

    suites: dict[str, list[dict[str, Any]]] = {}
    for suite, name, time, result in tests:
        case: dict[str, Any] = {"name": name}
        if time is not None:
            case["time"] = time
        if result is not None:
            case["result"] = result
        suites.setdefault(suite, []).append(case)

    return {
        "tests": len(tests),
        "failures": 0,
        "errors": 0,
        "timestamp": timestamp,
        "time": "1s",
        "name": "AllTests",
        "testsuites": [{"name": suite, "testsuite": cases} for suite, cases in suites.items()],
    }


def make_zip(files: dict[str, Any]) -> bytes:
    """Create ZIP bytes; dict/list values are JSON-encoded, str/bytes written as-is."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            if isinstance(content, dict | list):
                content = json.dumps(content)
            zf.writestr(name, content)
    return buffer.getvalue()


def make_commit(sha: str, days_ago: float = 1, now: datetime = NOW, **kwargs: Any) -> Commit:
    return Commit(
        sha=sha,
        message=kwargs.get("message", f"commit {sha}"),
        author_name=kwargs.get("author_name", "Dev"),
        author_date=kwargs.get("author_date", iso_days_ago(days_ago, now)),
        html_url=f"https://github.com/owner/repo/commit/{sha}",
    )


def make_run(
    run_id: int,
    name: str = "Build",
    conclusion: str | None = "success",
    head_sha: str = "abc",
    display_title: str | None = None,
) -> BuildRun:
    return BuildRun(
        id=run_id,
        name=name,
        workflow_title=display_title or name,
        event="push",
        status="completed",
        conclusion=conclusion,
        created_at="2024-02-28T10:00:00Z",
        updated_at="2024-02-28T10:30:00Z",
        html_url=f"https://github.com/owner/repo/actions/runs/{run_id}",
        run_number=run_id,
        head_branch="main",
        head_sha=head_sha,
    )


def make_artifact(artifact_id: int, name: str, size_in_bytes: int = 2048) -> Artifact:
    return Artifact(
        id=artifact_id,
        name=name,
        size_in_bytes=size_in_bytes,
        expired=False,
        created_at="2024-02-28T10:30:00Z",
        updated_at="2024-02-28T10:30:00Z",
        archive_download_url=f"https://api.github.com/repos/owner/repo/actions/artifacts/{artifact_id}/zip",
    )


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient with fixed responses.

    Args:
        commits: Commit history per ``owner/repo`` key, newest first.
        runs: Workflow runs per commit sha.
        artifacts: Artifacts per run id.
        archives: ZIP bytes per artifact id.
    """

    def __init__(
        self,
        commits: dict[str, list[Commit]] | None = None,
        runs: dict[str, list[BuildRun]] | None = None,
        artifacts: dict[int, list[Artifact]] | None = None,
        archives: dict[int, bytes] | None = None,
    ):
        self.commits = commits or {}
        self.runs = runs or {}
        self.artifacts = artifacts or {}
        self.archives = archives or {}
        self.calls: list[tuple[str, Any]] = []

    async def list_commits(self, owner: str, repo: str) -> list[Commit]:
        self.calls.append(("list_commits", f"{owner}/{repo}"))
        return list(self.commits.get(f"{owner}/{repo}", []))

    async def list_runs_for_commit(self, owner: str, repo: str, sha: str) -> list[BuildRun]:
        self.calls.append(("list_runs_for_commit", sha))
        return list(self.runs.get(sha, []))

    async def list_run_artifacts(self, owner: str, repo: str, run_id: int) -> list[Artifact]:
        self.calls.append(("list_run_artifacts", run_id))
        return list(self.artifacts.get(run_id, []))

    async def download_artifact(self, owner: str, repo: str, artifact_id: int) -> bytes:
        self.calls.append(("download_artifact", artifact_id))
        return self.archives.get(artifact_id, b"")

    def visited_shas(self) -> list[str]:
        return [arg for name, arg in self.calls if name == "list_runs_for_commit"]


class CommitPlan:
    """Builder wiring commits to runs, artifacts and archives for a FakeGitHubClient."""

    def __init__(self) -> None:
        self.client = FakeGitHubClient()
        self._next_id = 1

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_commit(
        self,
        repo: str,
        sha: str,
        platforms: list[str],
        days_ago: float = 1,
        author_date: str | None = None,
    ) -> Commit:
        """Append a commit (older than previous ones) with one artifact per platform.

        ``platforms`` holds runner labels like "ubuntu-latest".
        """
        kwargs = {"author_date": author_date} if author_date else {}
        commit = make_commit(sha, days_ago=days_ago, **kwargs)
        self.client.commits.setdefault(repo, []).append(commit)

        if not platforms:
            return commit

        run = make_run(self._id(), head_sha=sha)
        self.client.runs[sha] = [run]
        artifacts = []
        for label in platforms:
            artifact = make_artifact(self._id(), f"test-results-{label}")
            self.client.archives[artifact.id] = make_zip(
                {f"test-results-{label}.json": make_gtest_report()}
            )
            artifacts.append(artifact)
        self.client.artifacts[run.id] = artifacts
        return commit


ALL_RUNNERS = ["ubuntu-latest", "windows-latest", "macos-latest"]
