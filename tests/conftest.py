"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest
import structlog

from gtest_harvest.logging import configure_logging

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True, scope="session")
def quiet_logging() -> Generator[None, None, None]:
    """Keep structured logs out of test output."""
    configure_logging(log_level="DEBUG", json_format=True, stream=io.StringIO())
    yield
    structlog.reset_defaults()


@pytest.fixture
def log_stream() -> Generator[io.StringIO, None, None]:
    """Route structured logs into a buffer the test can inspect."""
    stream = io.StringIO()
    configure_logging(log_level="DEBUG", json_format=True, stream=stream)
    yield stream
    configure_logging(log_level="DEBUG", json_format=True, stream=io.StringIO())
