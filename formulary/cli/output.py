"""Output formatting for CLI operations.

This module provides:
- configure_logging: Root logger setup from --log-level / --log-file
- print_report: Text or JSON rendering of a validation report
- handle_error: Formatted error messages with context and optional stack traces
"""

import json
import logging
import sys
import traceback
from pathlib import Path

from formulary.core.report import Report


def configure_logging(level: str = "warning", log_file: Path | None = None) -> None:
    """Configure the root logger; messages go to stderr or to ``log_file``."""
    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


def print_report(report: Report, report_format: str = "text", quiet: bool = False) -> None:
    """Print a report to stdout.

    In text mode ``quiet`` suppresses the output of valid documents. JSON
    output is always printed.
    """
    if report_format == "json":
        print(json.dumps(report.to_json(), indent=2, ensure_ascii=False))
        return

    if quiet and report.is_valid():
        return
    print(report.format())


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display error message with context.

    Displays error messages to stderr with optional context fields from
    FormularyError exceptions. When verbose mode is enabled, also displays
    the full stack trace.

    Example:
        try:
            # ... operation ...
        except FormularyError as e:
            handle_error(e, verbose=True)
    """
    print(f"Error: {error}", file=sys.stderr)

    if hasattr(error, "context") and error.context:
        print("Context:", file=sys.stderr)
        for key, value in error.context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
