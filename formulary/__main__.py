"""CLI entry point for formulary.

Enables invocation via `python -m formulary` or the `formulary` script.
"""

import sys

from formulary.cli.app import app


def main() -> int:
    exit_code = app()
    return exit_code if exit_code is not None else 0


if __name__ == "__main__":
    sys.exit(main())
