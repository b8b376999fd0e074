"""Commit and build selection pipeline.

Stages, leaf-first:
1. artifacts - download a run's artifacts and map reports to platforms
2. runs - pick the representative build run of a commit
3. scanner - walk a repository's commit window for full coverage
4. selector - pick the newest selection across repositories
"""

from .artifacts import assign_platform_reports, parse_report_entries, resolve_artifacts
from .runs import fetch_actions_for_commit, is_build_run, pick_build_run
from .scanner import DEFAULT_MAX_COMMIT_AGE_DAYS, scan_repository, select_commit_window
from .selector import pick_newest_selection, select_across_repositories

__all__ = [
    # artifacts
    "parse_report_entries",
    "assign_platform_reports",
    "resolve_artifacts",
    # runs
    "is_build_run",
    "pick_build_run",
    "fetch_actions_for_commit",
    # scanner
    "DEFAULT_MAX_COMMIT_AGE_DAYS",
    "select_commit_window",
    "scan_repository",
    # selector
    "pick_newest_selection",
    "select_across_repositories",
]
