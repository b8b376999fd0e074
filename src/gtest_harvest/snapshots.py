"""Local snapshot reports used when GitHub cannot be reached."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from gtest_harvest.core.exceptions import MissingPlatformError, SnapshotError
from gtest_harvest.core.platforms import LINUX, MACOS, WINDOWS
from gtest_harvest.parsers.gtest import is_gtest_report

# Runner labels used in snapshot file names.
SNAPSHOT_RUNNERS: dict[str, str] = {
    LINUX: "ubuntu-latest",
    WINDOWS: "windows-latest",
    MACOS: "macos-latest",
}


def snapshot_path(directory: Path | str, platform: str, commit_sha: str) -> Path:
    """Path of the saved report for a platform and commit."""
    return Path(directory) / f"test-results-{SNAPSHOT_RUNNERS[platform]}-{commit_sha}.json"


def _read_snapshot(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotError(str(path), str(e)) from e
    if not is_gtest_report(data):
        raise SnapshotError(str(path), "not a GoogleTest JSON report")
    return data


def load_local_snapshots(directory: Path | str, commit_sha: str) -> dict[str, dict[str, Any]]:
    """Read the saved Linux, Windows and macOS reports for a commit.

    Raises:
        MissingPlatformError: If any platform's snapshot file is absent.
        SnapshotError: If a snapshot file is unreadable or not a report.
    """
    reports: dict[str, dict[str, Any]] = {}
    missing = []
    for platform in SNAPSHOT_RUNNERS:
        path = snapshot_path(directory, platform, commit_sha)
        if not path.is_file():
            missing.append(platform)
            continue
        reports[platform] = _read_snapshot(path)

    if missing:
        raise MissingPlatformError(missing)
    return reports
