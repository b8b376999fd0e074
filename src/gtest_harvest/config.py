"""Configuration settings for gtest-harvest."""

from __future__ import annotations

import json

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gtest_harvest.core.exceptions import ConfigurationError
from gtest_harvest.core.models import RepositoryTarget
from gtest_harvest.harvest.scanner import DEFAULT_MAX_COMMIT_AGE_DAYS

DEFAULT_REPOSITORIES = ["etib-corp/utility"]
DEFAULT_BASE_COMMITS: dict[str, str] = {
    "etib-corp/utility": "5e5e76cf451bccddaf1b38245b6085695b69f7fa",
}


def parse_repo_list(value: str) -> list[RepositoryTarget]:
    """Parse a comma-separated list of ``owner/repo`` identifiers.

    Blank items are skipped.

    Raises:
        ConfigurationError: If an item is not in owner/repo format.
    """
    return [RepositoryTarget.parse(item) for item in value.split(",") if item.strip()]


def parse_base_commit_map(value: str | None) -> dict[str, str]:
    """Parse a JSON object mapping ``owner/repo`` to a baseline sha.

    Invalid JSON or a non-object falls back to DEFAULT_BASE_COMMITS.
    """
    if value is None:
        return dict(DEFAULT_BASE_COMMITS)
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return dict(DEFAULT_BASE_COMMITS)
    if not isinstance(parsed, dict):
        return dict(DEFAULT_BASE_COMMITS)
    return {str(k): str(v) for k, v in parsed.items() if v}


class Settings(BaseSettings):
    """Settings loaded from environment variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub
    github_token: str | None = None
    github_target_repos: str = ",".join(DEFAULT_REPOSITORIES)
    github_base_commit_by_repo: str = json.dumps(DEFAULT_BASE_COMMITS)
    github_max_commit_age_days: int = DEFAULT_MAX_COMMIT_AGE_DAYS

    # Fallback
    gtest_snapshot_dir: str | None = None

    # Logging
    log_level: str = "INFO"
    log_json_format: bool = False

    @property
    def repositories(self) -> list[RepositoryTarget]:
        return parse_repo_list(self.github_target_repos)

    @property
    def base_commits(self) -> dict[str, str]:
        return parse_base_commit_map(self.github_base_commit_by_repo)


def load_settings(**overrides) -> Settings:
    """Load settings, applying non-None keyword overrides.

    Raises:
        ConfigurationError: If a setting has an invalid value.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
