"""Platform classification for artifact and file names."""

from __future__ import annotations

from collections.abc import Mapping

LINUX = "Linux"
WINDOWS = "Windows"
MACOS = "macOS"

REQUIRED_PLATFORMS: tuple[str, ...] = (LINUX, WINDOWS, MACOS)

# Checked in order; first match wins.
_PLATFORM_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (LINUX, ("ubuntu", "linux")),
    (WINDOWS, ("windows",)),
    (MACOS, ("macos", "mac")),
)


def detect_platform(label: str | None) -> str | None:
    """Map a free-text label to a platform name.

    Examples:
        "test-results-ubuntu-latest" -> "Linux"
        "gtest-Windows.json" -> "Windows"
        "coverage" -> None
    """
    if not label:
        return None
    lowered = label.lower()
    for platform, keywords in _PLATFORM_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return platform
    return None


def missing_platforms(reports_by_platform: Mapping[str, object]) -> list[str]:
    """Return required platforms absent from the mapping, in canonical order."""
    return [p for p in REQUIRED_PLATFORMS if p not in reports_by_platform]


def has_all_platforms(reports_by_platform: Mapping[str, object]) -> bool:
    """Whether the mapping covers every required platform."""
    return not missing_platforms(reports_by_platform)
