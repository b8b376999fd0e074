"""Shared exceptions for the gtest-harvest package."""

from __future__ import annotations


class HarvestError(Exception):
    """Base class for fatal errors that abort an invocation."""


class ConfigurationError(HarvestError):
    """Raised for malformed repository identifiers or unreachable baselines."""


class CoverageError(HarvestError):
    """Raised when no repository yields a commit with every required platform."""

    def __init__(self, repositories: list[str], max_age_days: int) -> None:
        self.repositories = repositories
        self.max_age_days = max_age_days
        super().__init__(
            f"No usable build artifacts found across repositories "
            f"({', '.join(repositories)}) within {max_age_days} days"
        )


class MissingPlatformError(HarvestError):
    """Raised when a selected report set lacks a required platform."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing gtest reports for: {', '.join(missing)}")


class SnapshotError(HarvestError):
    """Raised when a local snapshot file cannot be read or is not a report."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unusable snapshot {path}: {reason}")
