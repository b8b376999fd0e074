"""GitHub REST client for commits, workflow runs and artifacts.

This module provides functionality to:
- List the commit history of a repository (newest first)
- List workflow runs triggered for a commit
- List and download the artifacts of a workflow run
"""

from __future__ import annotations

from typing import Any

import httpx

from gtest_harvest.core.exceptions import HarvestError
from gtest_harvest.core.models import Artifact, BuildRun, Commit

PER_PAGE = 100


class GitHubAPIError(HarvestError):
    """Exception raised for GitHub API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.status_code:
            return f"GitHub API Error ({self.status_code}): {self.message}"
        return f"GitHub API Error: {self.message}"


class GitHubClient:
    """Async client for the GitHub endpoints used by the harvester.

    Usage:
        client = GitHubClient(token="ghp_xxx")
        commits = await client.list_commits("owner", "repo")
        runs = await client.list_runs_for_commit("owner", "repo", commits[0].sha)
        artifacts = await client.list_run_artifacts("owner", "repo", runs[0].id)
        zip_data = await client.download_artifact("owner", "repo", artifacts[0].id)
    """

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str | None = None):
        """Initialize the client.

        Args:
            token: GitHub token; anonymous requests are used when omitted.
        """
        self.token = token
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (e.g., /repos/owner/repo/actions/runs)
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            GitHubAPIError: On API errors
        """
        url = f"{self.BASE_URL}{endpoint}"

        async with httpx.AsyncClient() as client:
            try:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers,
                    params=params,
                    timeout=30.0,
                )
            except httpx.RequestError as e:
                raise GitHubAPIError(f"Request failed: {e}") from e

        if response.status_code == 401:
            raise GitHubAPIError("Unauthorized - check your token", status_code=401)
        elif response.status_code == 403:
            raise GitHubAPIError("Rate limit exceeded or forbidden", status_code=403)
        elif response.status_code == 404:
            raise GitHubAPIError(f"Not found: {endpoint}", status_code=404)
        elif response.status_code >= 400:
            raise GitHubAPIError(
                f"Request failed: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Invalid JSON response from {endpoint}",
                status_code=response.status_code,
            ) from e

    async def _download(self, url: str) -> bytes:
        """Download binary content from a URL, following redirects.

        Raises:
            GitHubAPIError: On download errors
        """
        async with httpx.AsyncClient(follow_redirects=True) as client:
            try:
                response = await client.get(
                    url,
                    headers=self._headers,
                    timeout=60.0,
                )
            except httpx.RequestError as e:
                raise GitHubAPIError(f"Download failed: {e}") from e

        if response.status_code >= 400:
            raise GitHubAPIError(
                f"Download failed: {response.status_code}",
                status_code=response.status_code,
            )

        return response.content

    async def _paginate(
        self,
        endpoint: str,
        key: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Collect every page of a list endpoint.

        Args:
            endpoint: API endpoint.
            key: Field holding the items when the endpoint wraps them in an
                object (e.g. ``artifacts``); None for bare JSON arrays.
            params: Extra query parameters.

        Returns:
            All items across pages, in API order.
        """
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            data = await self._request(
                "GET",
                endpoint,
                params={**(params or {}), "per_page": PER_PAGE, "page": page},
            )
            batch = (data or {}).get(key, []) if key else (data or [])
            items.extend(batch)
            if len(batch) < PER_PAGE:
                return items
            page += 1

    async def list_commits(self, owner: str, repo: str) -> list[Commit]:
        """List the full commit history of the default branch, newest first."""
        data = await self._paginate(f"/repos/{owner}/{repo}/commits")
        return [Commit.from_api(commit) for commit in data]

    async def list_runs_for_commit(self, owner: str, repo: str, sha: str) -> list[BuildRun]:
        """List workflow runs whose head commit is ``sha``."""
        data = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/actions/runs",
            params={"head_sha": sha, "per_page": PER_PAGE},
        )
        return [BuildRun.from_api(run) for run in (data or {}).get("workflow_runs", [])]

    async def list_run_artifacts(self, owner: str, repo: str, run_id: int) -> list[Artifact]:
        """List every artifact attached to a workflow run."""
        data = await self._paginate(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/artifacts",
            key="artifacts",
        )
        return [Artifact.from_api(artifact) for artifact in data]

    async def download_artifact(self, owner: str, repo: str, artifact_id: int) -> bytes:
        """Download an artifact as a zip file."""
        url = f"{self.BASE_URL}/repos/{owner}/{repo}/actions/artifacts/{artifact_id}/zip"
        return await self._download(url)
