"""Per-platform totals over test rows."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gtest_harvest.core.models import PerformanceSummary, PlatformSummary, TestRow
from gtest_harvest.core.platforms import REQUIRED_PLATFORMS
from gtest_harvest.parsers.gtest import extract_rows

COMPLETED_STATUS = "COMPLETED"


def summarize_platform(
    platform: str,
    rows: list[TestRow],
    timestamp: str | None = None,
) -> PlatformSummary:
    """Total the rows of one platform.

    Every row whose status is not COMPLETED counts as a failure. Reports
    carry no separate error channel, so errors is always 0.
    """
    return PlatformSummary(
        platform=platform,
        tests=len(rows),
        failures=sum(1 for row in rows if row.status != COMPLETED_STATUS),
        errors=0,
        total_ms=sum(row.duration_ms for row in rows),
        timestamp=timestamp,
    )


def summarize_performance(reports_by_platform: Mapping[str, dict[str, Any]]) -> PerformanceSummary:
    """Summarize performance tests for whichever platforms have reports."""
    platforms = [
        summarize_platform(
            platform,
            extract_rows(reports_by_platform[platform], platform, performance_only=True),
            reports_by_platform[platform].get("timestamp"),
        )
        for platform in REQUIRED_PLATFORMS
        if platform in reports_by_platform
    ]
    totals = [p.total_ms for p in platforms]
    return PerformanceSummary(
        platforms=platforms,
        mean_total_ms=sum(totals) / len(totals) if totals else 0,
        max_total_ms=max(totals) if totals else 0,
    )
