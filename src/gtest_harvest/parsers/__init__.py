"""Test report parsers."""

from gtest_harvest.parsers.gtest import (
    extract_rows,
    is_gtest_report,
    is_performance_test,
    parse_time_to_ms,
)

__all__ = [
    "extract_rows",
    "is_gtest_report",
    "is_performance_test",
    "parse_time_to_ms",
]
