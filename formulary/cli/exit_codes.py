"""Exit code constants for CLI commands.

Exit codes:
    0: SUCCESS - Document is valid / command completed
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: ISSUES_FOUND - Document validated with issues
    3: SCHEMA_ERROR - Schema cannot be normalized or names unknown rules
    4: INPUT_ERROR - Data or schema document cannot be read or parsed
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> from formulary.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> report = validate_sync(data, schema)
        >>> sys.exit(ExitCode.SUCCESS if report.is_valid() else ExitCode.ISSUES_FOUND)
    """

    SUCCESS = 0
    UNEXPECTED_ERROR = 1
    ISSUES_FOUND = 2
    SCHEMA_ERROR = 3
    INPUT_ERROR = 4
    CONFIG_ERROR = 6
