"""Domain models for commits, build runs, artifacts and scan results.

The models are plain dataclasses built from GitHub REST payloads. Each one
knows how to serialize itself into the camelCase shape used by the
aggregated JSON document, so the reporter never touches raw payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gtest_harvest.core.exceptions import ConfigurationError, HarvestError


@dataclass(frozen=True)
class RepositoryTarget:
    """A repository to scan, identified by owner and name."""

    owner: str
    name: str

    @property
    def key(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, identifier: str) -> RepositoryTarget:
        """Parse an ``owner/repo`` identifier.

        Raises:
            ConfigurationError: If owner or repo is missing.
        """
        parts = identifier.strip().split("/")
        owner = parts[0] if len(parts) > 0 else ""
        name = parts[1] if len(parts) > 1 else ""
        if not owner or not name:
            raise ConfigurationError(
                f"Invalid repository identifier: {identifier}. Expected owner/repo format."
            )
        return cls(owner=owner, name=name)


@dataclass(frozen=True)
class Commit:
    """A commit as returned by the repository history API."""

    sha: str
    message: str | None = None
    author_name: str | None = None
    author_date: str | None = None
    html_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Commit:
        details = data.get("commit") or {}
        author = details.get("author") or {}
        return cls(
            sha=data["sha"],
            message=details.get("message"),
            author_name=author.get("name"),
            author_date=author.get("date"),
            html_url=data.get("html_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sha": self.sha,
            "message": self.message,
            "authorName": self.author_name,
            "authorDate": self.author_date,
            "htmlUrl": self.html_url,
        }


@dataclass(frozen=True)
class BuildRun:
    """One GitHub Actions workflow run tied to a commit."""

    id: int
    name: str | None = None
    workflow_title: str | None = None
    event: str | None = None
    status: str | None = None
    conclusion: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    html_url: str | None = None
    run_number: int | None = None
    head_branch: str | None = None
    head_sha: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> BuildRun:
        return cls(
            id=data["id"],
            name=data.get("name"),
            workflow_title=data.get("display_title"),
            event=data.get("event"),
            status=data.get("status"),
            conclusion=data.get("conclusion"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            html_url=data.get("html_url"),
            run_number=data.get("run_number"),
            head_branch=data.get("head_branch"),
            head_sha=data.get("head_sha"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "workflowName": self.workflow_title,
            "event": self.event,
            "status": self.status,
            "conclusion": self.conclusion,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "htmlUrl": self.html_url,
            "runNumber": self.run_number,
            "headBranch": self.head_branch,
            "headSha": self.head_sha,
        }


@dataclass(frozen=True)
class Artifact:
    """A downloadable archive produced by a build run."""

    id: int
    name: str
    size_in_bytes: int = 0
    expired: bool = False
    created_at: str | None = None
    updated_at: str | None = None
    archive_download_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Artifact:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            size_in_bytes=data.get("size_in_bytes", 0),
            expired=data.get("expired", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            archive_download_url=data.get("archive_download_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sizeInBytes": self.size_in_bytes,
            "expired": self.expired,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "archiveDownloadUrl": self.archive_download_url,
        }


@dataclass(frozen=True)
class TestRow:
    """A single normalized test case from a platform report."""

    __test__ = False  # not a pytest class

    platform: str
    suite: str | None
    test: str | None
    full_name: str
    duration_ms: float
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "suite": self.suite,
            "test": self.test,
            "fullName": self.full_name,
            "timeMs": self.duration_ms,
            "status": self.status,
        }


@dataclass
class PlatformSummary:
    """Totals for one platform's test rows."""

    platform: str
    tests: int
    failures: int
    errors: int
    total_ms: float
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "tests": self.tests,
            "failures": self.failures,
            "errors": self.errors,
            "totalMs": self.total_ms,
            "timestamp": self.timestamp,
        }


@dataclass
class PerformanceSummary:
    """Performance-test totals for one commit across available platforms."""

    platforms: list[PlatformSummary] = field(default_factory=list)
    mean_total_ms: float = 0
    max_total_ms: float = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "platforms": [p.to_dict() for p in self.platforms],
            "meanTotalMs": self.mean_total_ms,
            "maxTotalMs": self.max_total_ms,
        }


@dataclass
class CommitActions:
    """Build run selection and resolved reports for a single commit."""

    runs: list[BuildRun] = field(default_factory=list)
    selected_build_run: BuildRun | None = None
    artifacts: list[Artifact] = field(default_factory=list)
    reports_by_platform: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class CommitScanResult:
    """Audit record for one visited commit, covered or not."""

    commit: Commit
    runs: tuple[BuildRun, ...]
    selected_build_run: BuildRun | None
    artifacts: tuple[Artifact, ...]
    performance: PerformanceSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "commit": self.commit.to_dict(),
            "runs": [r.to_dict() for r in self.runs],
            "selectedBuildRun": (
                self.selected_build_run.to_dict() if self.selected_build_run else None
            ),
            "artifacts": [a.to_dict() for a in self.artifacts],
            "performance": self.performance.to_dict(),
        }


@dataclass
class Selection:
    """The first fully covered commit found in a repository."""

    repository: RepositoryTarget
    commit: Commit
    actions: CommitActions


@dataclass
class RepositoryScan:
    """Ordered scan trail for one repository."""

    repository: RepositoryTarget
    base_commit_sha: str | None
    commits: list[CommitScanResult] = field(default_factory=list)
    selection: Selection | None = None

    @property
    def scanned_commit_count(self) -> int:
        return len(self.commits)

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": self.repository.key,
            "baseCommitSha": self.base_commit_sha,
            "scannedCommitCount": self.scanned_commit_count,
            "commits": [c.to_dict() for c in self.commits],
        }


@dataclass
class HarvestResult:
    """Outcome of scanning every configured repository."""

    selected: RepositoryScan
    scans: list[RepositoryScan]

    @property
    def selection(self) -> Selection:
        if self.selected.selection is None:
            raise HarvestError(
                f"Repository {self.selected.repository.key} has no fully covered commit"
            )
        return self.selected.selection
