"""Output formatting for the gtest-harvest CLI."""

from __future__ import annotations

import json
from typing import Any

from gtest_harvest.core.models import Artifact
from gtest_harvest.core.platforms import detect_platform


def format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable format."""
    if size_bytes >= 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes} B"


def format_report_json(report: dict[str, Any]) -> str:
    """Serialize the report document with a trailing newline."""
    return json.dumps(report, indent=2, ensure_ascii=False) + "\n"


def format_artifact_table(run_id: int, artifacts: list[Artifact]) -> str:
    """Render a run's artifacts with size and detected platform."""
    if not artifacts:
        return f"No artifacts found for run {run_id}.\n"

    lines = [f"Artifacts for run {run_id}:", "-" * 70]
    for artifact in artifacts:
        expired_marker = " [EXPIRED]" if artifact.expired else ""
        platform = detect_platform(artifact.name) or "-"
        size = format_size(artifact.size_in_bytes)
        lines.append(f"  {artifact.name:<40} {platform:<8} {size:>10}{expired_marker}")
    lines.append("-" * 70)
    lines.append(f"Total: {len(artifacts)} artifact(s)")
    return "\n".join(lines) + "\n"
