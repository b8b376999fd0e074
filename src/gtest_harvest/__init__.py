"""gtest-harvest - cross-platform GoogleTest report aggregation from GitHub Actions."""

__version__ = "0.1.0"

from gtest_harvest.core.models import (
    Artifact,
    BuildRun,
    Commit,
    CommitScanResult,
    RepositoryScan,
    RepositoryTarget,
    Selection,
    TestRow,
)
from gtest_harvest.core.platforms import REQUIRED_PLATFORMS, detect_platform

__all__ = [
    "Artifact",
    "BuildRun",
    "Commit",
    "CommitScanResult",
    "RepositoryScan",
    "RepositoryTarget",
    "Selection",
    "TestRow",
    "REQUIRED_PLATFORMS",
    "detect_platform",
]
