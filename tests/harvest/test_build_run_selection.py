"""Tests for picking the representative build run of a commit."""

from __future__ import annotations

import pytest

from gtest_harvest.core.models import RepositoryTarget
from gtest_harvest.harvest.runs import fetch_actions_for_commit, is_build_run, pick_build_run
from tests.factories import FakeGitHubClient, make_artifact, make_gtest_report, make_run, make_zip

REPO = RepositoryTarget("owner", "repo")


class TestIsBuildRun:
    @pytest.mark.parametrize(
        "name,title,expected",
        [
            ("Build", "Build", True),
            ("CI", "Nightly BUILD matrix", True),
            ("rebuild-docs", "Docs", True),
            ("Lint", "Lint", False),
            (None, None, False),
        ],
    )
    def test_matches_name_or_title(self, name, title, expected):
        run = make_run(1, name=name, display_title=title)
        assert is_build_run(run) is expected


class TestPickBuildRun:
    def test_no_runs(self):
        assert pick_build_run([]) is None

    def test_prefers_successful_build_run(self):
        failed_build = make_run(1, name="Build", conclusion="failure")
        lint = make_run(2, name="Lint", conclusion="success")
        ok_build = make_run(3, name="Build", conclusion="success")

        assert pick_build_run([failed_build, lint, ok_build]) is ok_build

    def test_first_build_run_when_none_succeeded(self):
        first = make_run(1, name="Build", conclusion="failure")
        second = make_run(2, name="Build", conclusion="cancelled")

        assert pick_build_run([make_run(9, name="Lint"), first, second]) is first

    def test_falls_back_to_all_runs(self):
        lint = make_run(1, name="Lint", conclusion="failure")
        docs = make_run(2, name="Docs", conclusion="success")

        assert pick_build_run([lint, docs]) is docs

    def test_falls_back_to_first_run(self):
        lint = make_run(1, name="Lint", conclusion="failure")
        docs = make_run(2, name="Docs", conclusion=None)

        assert pick_build_run([lint, docs]) is lint


class TestFetchActionsForCommit:
    @pytest.mark.asyncio
    async def test_commit_without_runs_is_empty(self):
        client = FakeGitHubClient()

        actions = await fetch_actions_for_commit(client, REPO, "abc")

        assert actions.runs == []
        assert actions.selected_build_run is None
        assert actions.artifacts == []
        assert actions.reports_by_platform == {}
        assert ("list_run_artifacts", 1) not in client.calls

    @pytest.mark.asyncio
    async def test_resolves_artifacts_of_selected_run(self):
        report = make_gtest_report()
        lint = make_run(1, name="Lint", head_sha="abc")
        build = make_run(2, name="Build", head_sha="abc")
        client = FakeGitHubClient(
            runs={"abc": [lint, build]},
            artifacts={2: [make_artifact(10, "test-results-ubuntu-latest")]},
            archives={10: make_zip({"r.json": report})},
        )

        actions = await fetch_actions_for_commit(client, REPO, "abc")

        assert actions.runs == [lint, build]
        assert actions.selected_build_run is build
        assert [a.id for a in actions.artifacts] == [10]
        assert actions.reports_by_platform == {"Linux": report}
        assert ("list_run_artifacts", 2) in client.calls
