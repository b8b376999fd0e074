"""Timestamp parsing for GitHub ISO 8601 dates."""

from __future__ import annotations

from datetime import UTC, datetime


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp such as ``2024-01-20T10:00:00Z``.

    Naive values are taken as UTC. Returns None for missing or invalid input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
