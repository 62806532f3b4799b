"""CLI command implementations.

This module implements the CLI commands for the formulary tool:
- validate: Validate a JSON/YAML document against a schema file
- check_schema: Normalize a schema and check every rule name
- list_rules: List the registered rules

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import sys
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from formulary.cli.config import (
    ConfigError,
    DocumentError,
    load_config,
    load_document,
    merge_config,
    validate_config,
)
from formulary.cli.exit_codes import ExitCode
from formulary.cli.output import configure_logging, handle_error, print_report
from formulary.collaborators import default_collaborators
from formulary.core.exceptions import RecipeError
from formulary.core.protocols import RuleKind
from formulary.core.recipe import check_recipe
from formulary.core.registry import default_registry
from formulary.engine import Engine


def validate(
    data_path: Annotated[Path, Parameter(help="JSON or YAML document to validate")],
    schema: Annotated[Path | None, Parameter(help="Schema file (JSON or YAML)")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    phone_region: Annotated[str | None, Parameter(help="Default phone region, e.g. NL")] = None,
    format: Annotated[str | None, Parameter(help="Report format (text, json)")] = None,
    strict: Annotated[bool | None, Parameter(help="Check all rule names first")] = None,
    quiet: Annotated[bool, Parameter(help="Print nothing for valid documents")] = False,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="Log level (debug, info, warning, error)")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Validate a document against a schema and print the report.

    Args:
        data_path: Document to validate
        schema: Schema file (may come from the configuration file instead)
        config: Configuration file (optional)
        phone_region: Region for phone numbers written without "+"
        format: "text" (default) or "json"; JSON includes the transformed value
        strict: Reject schemas naming unknown rules before validating
        quiet: Suppress text output for valid documents
        verbose: Show stack traces for errors
        log_level: Logging level
        log_file: Write log records to this file instead of stderr

    Returns:
        Exit code (0 valid, 2 issues found, non-zero for errors)

    Example:
        >>> exit_code = validate(Path("user.json"), schema=Path("user.schema.yaml"))
    """
    try:
        cfg: dict[str, Any] = {}
        if config:
            cfg = load_config(config)

        cfg = merge_config(
            cfg,
            schema=str(schema) if schema else None,
            phone_region=phone_region,
            format=format,
            strict=strict,
            log_level=log_level,
        )
        validate_config(cfg)
        configure_logging(cfg.get("log_level", "warning"), log_file)

        if "schema" not in cfg:
            print("Error: No schema given (use --schema or a configuration file)", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        schema_literal = load_document(Path(cfg["schema"]))
        document = load_document(data_path)

        engine = Engine(
            collaborators=default_collaborators(cfg.get("phone_region")),
            strict=cfg.get("strict", False),
        )
        report = engine.validate_sync(document, schema_literal)

        print_report(report, cfg.get("format", "text"), quiet=quiet)
        return ExitCode.SUCCESS if report.is_valid() else ExitCode.ISSUES_FOUND

    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except DocumentError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.INPUT_ERROR
    except RecipeError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.SCHEMA_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def check_schema(
    schema_path: Annotated[Path, Parameter(help="Schema file (JSON or YAML)")],
    verbose: Annotated[bool, Parameter(help="List the top-level rules")] = False,
) -> int:
    """Check that a schema normalizes and names only registered rules.

    Returns:
        Exit code (0 for a usable schema, 3 for schema errors, 4 for unreadable files)
    """
    try:
        recipe = check_recipe(load_document(schema_path), default_registry())
    except DocumentError as e:
        handle_error(e)
        return ExitCode.INPUT_ERROR
    except RecipeError as e:
        handle_error(e)
        return ExitCode.SCHEMA_ERROR

    print(f"✓ Schema is valid: {schema_path}")
    if verbose:
        for name in recipe:
            print(f"  - {name}")
    return ExitCode.SUCCESS


def list_rules(
    kind: Annotated[str | None, Parameter(help="Only list validators or filters")] = None,
) -> int:
    """List available rules with descriptions.

    Returns:
        Exit code (0 for success, 6 for an unknown kind)
    """
    registry = default_registry()

    rule_kind = None
    if kind is not None:
        try:
            rule_kind = RuleKind(kind)
        except ValueError:
            print(f"Error: Unknown rule kind '{kind}'. Available: filter, validator", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

    names = registry.names(rule_kind)
    if not names:
        print("No rules registered.")
        return ExitCode.SUCCESS

    width = max(len(name) for name in names)
    print("Available rules:")
    for name in names:
        rule = registry.get(name)
        print(f"  {name:<{width}}  {rule.kind.value:<9}  {rule.description}".rstrip())

    return ExitCode.SUCCESS
