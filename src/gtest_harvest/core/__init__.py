"""Core domain types shared across gtest-harvest."""
