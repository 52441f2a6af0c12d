#!/usr/bin/env python3
"""
IntelloTask - Main entry point (python -m intellotask).
"""
import sys

from intellotask.cli import cli


def main() -> int:
    """Main entry point for the intellotask package."""
    cli(prog_name="intellotask")
    return 0


if __name__ == "__main__":
    sys.exit(main())
