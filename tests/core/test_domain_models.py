"""Tests for domain models built from GitHub payloads."""

from __future__ import annotations

import pytest

from gtest_harvest.core.exceptions import ConfigurationError, HarvestError
from gtest_harvest.core.models import (
    Artifact,
    BuildRun,
    Commit,
    HarvestResult,
    RepositoryScan,
    RepositoryTarget,
)


class TestRepositoryTarget:
    def test_parse(self):
        target = RepositoryTarget.parse(" etib-corp/utility ")

        assert target.owner == "etib-corp"
        assert target.name == "utility"
        assert target.key == "etib-corp/utility"

    @pytest.mark.parametrize("identifier", ["utility", "/utility", "etib-corp/", ""])
    def test_parse_rejects_incomplete_identifier(self, identifier):
        with pytest.raises(ConfigurationError, match="Expected owner/repo format"):
            RepositoryTarget.parse(identifier)


class TestCommit:
    def test_from_api(self):
        commit = Commit.from_api(
            {
                "sha": "abc",
                "html_url": "https://github.com/o/r/commit/abc",
                "commit": {
                    "message": "Fix build",
                    "author": {"name": "Dev", "date": "2024-02-01T00:00:00Z"},
                },
            }
        )

        assert commit.to_dict() == {
            "sha": "abc",
            "message": "Fix build",
            "authorName": "Dev",
            "authorDate": "2024-02-01T00:00:00Z",
            "htmlUrl": "https://github.com/o/r/commit/abc",
        }

    def test_from_api_without_commit_details(self):
        commit = Commit.from_api({"sha": "abc"})

        assert commit.author_date is None
        assert commit.message is None


class TestBuildRun:
    def test_display_title_becomes_workflow_name(self):
        run = BuildRun.from_api(
            {"id": 7, "name": "CI", "display_title": "Build and test", "conclusion": "success"}
        )

        data = run.to_dict()
        assert data["workflowName"] == "Build and test"
        assert data["name"] == "CI"
        assert data["conclusion"] == "success"
        assert data["headSha"] is None


class TestArtifact:
    def test_defaults_for_missing_fields(self):
        artifact = Artifact.from_api({"id": 3})

        assert artifact.name == ""
        assert artifact.size_in_bytes == 0
        assert artifact.expired is False


class TestRepositoryScan:
    def test_to_dict_counts_commits(self):
        scan = RepositoryScan(repository=RepositoryTarget("o", "r"), base_commit_sha="base")

        data = scan.to_dict()

        assert data == {
            "repository": "o/r",
            "baseCommitSha": "base",
            "scannedCommitCount": 0,
            "commits": [],
        }


class TestHarvestResult:
    def test_selection_without_covered_commit_raises(self):
        scan = RepositoryScan(repository=RepositoryTarget("o", "r"), base_commit_sha=None)
        result = HarvestResult(selected=scan, scans=[scan])

        with pytest.raises(HarvestError, match="o/r has no fully covered commit"):
            result.selection
