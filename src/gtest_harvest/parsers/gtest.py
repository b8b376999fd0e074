"""GoogleTest JSON report parser.

GoogleTest writes reports with ``--gtest_output=json``. The top-level
document carries a ``tests`` count and a ``testsuites`` list; each suite
holds its test cases under ``testsuite``:

    {
      "tests": 2,
      "testsuites": [
        {"name": "Math", "testsuite": [
          {"name": "Add", "time": "0.002s", "result": "COMPLETED"}
        ]}
      ]
    }
"""

from __future__ import annotations

import re
from typing import Any

from gtest_harvest.core.models import TestRow

UNKNOWN_STATUS = "UNKNOWN"

_PERFORMANCE_PREFIXES = ("performance", "testperformance")

# Leading decimal number, optionally signed and with an exponent.
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_gtest_report(data: Any) -> bool:
    """Check if data looks like a GoogleTest JSON report.

    Requires a numeric ``tests`` count and a ``testsuites`` list whose
    items are all suite objects.
    """
    if not isinstance(data, dict):
        return False
    tests = data.get("tests")
    if not isinstance(tests, int | float) or isinstance(tests, bool):
        return False
    suites = data.get("testsuites")
    return isinstance(suites, list) and all(isinstance(suite, dict) for suite in suites)


def parse_time_to_ms(value: Any) -> float:
    """Convert a GoogleTest duration such as ``"0.25s"`` to milliseconds.

    Missing, blank or unparseable values yield 0.
    """
    if value is None:
        return 0
    text = str(value).strip()
    if not text:
        return 0
    if text.endswith("s"):
        text = text[:-1]
    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return 0
    return float(match.group(0)) * 1000


def is_performance_test(suite_name: Any, test_name: Any) -> bool:
    """Whether a suite or test name marks a performance test."""
    suite = str(suite_name or "").lower()
    test = str(test_name or "").lower()
    return suite.startswith(_PERFORMANCE_PREFIXES) or test.startswith(_PERFORMANCE_PREFIXES)


def extract_rows(
    report: dict[str, Any],
    platform: str,
    performance_only: bool = False,
) -> list[TestRow]:
    """Flatten a report into test rows tagged with ``platform``.

    Args:
        report: Parsed GoogleTest JSON document.
        platform: Platform the report belongs to.
        performance_only: Keep only performance tests (used for trend summaries).

    Returns:
        Rows in suite order, then test order.
    """
    rows: list[TestRow] = []
    for suite in _as_list(report.get("testsuites")):
        if not isinstance(suite, dict):
            continue
        suite_name = suite.get("name")
        for test in _as_list(suite.get("testsuite")):
            if not isinstance(test, dict):
                continue
            test_name = test.get("name")
            if performance_only and not is_performance_test(suite_name, test_name):
                continue
            rows.append(
                TestRow(
                    platform=platform,
                    suite=suite_name,
                    test=test_name,
                    full_name=f"{suite_name}.{test_name}",
                    duration_ms=parse_time_to_ms(test.get("time")),
                    status=_status_of(test),
                )
            )
    return rows


def _status_of(test: dict[str, Any]) -> str:
    result = test.get("result")
    return UNKNOWN_STATUS if result is None else str(result)


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []
