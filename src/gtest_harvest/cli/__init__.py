"""CLI package for gtest-harvest."""

from gtest_harvest.cli.app import app, main

__all__ = ["app", "main"]
