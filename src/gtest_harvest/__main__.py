"""Allow running gtest-harvest as a module: python -m gtest_harvest."""

from gtest_harvest.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
