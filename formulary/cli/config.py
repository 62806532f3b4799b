"""Configuration and document loading.

Configuration files (JSON or YAML) can specify:
- schema: Path to the schema file, relative to the configuration file
- phone_region: Default region for phone numbers without "+" (e.g. "NL")
- log_level: debug, info, warning or error
- strict: Check every rule name before validating
- format: Report format, text or json

CLI arguments take precedence over file settings.
"""

import json
from pathlib import Path
from typing import Any

import yaml

LOG_LEVELS = ("debug", "info", "warning", "error")
REPORT_FORMATS = ("text", "json")
KNOWN_KEYS = {"schema", "phone_region", "log_level", "strict", "format"}


class ConfigError(Exception):
    """Configuration file error.

    Raised when configuration files cannot be loaded, parsed, or validated.
    """


class DocumentError(Exception):
    """A data or schema document cannot be read or parsed."""


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document.

    Format is determined by file extension (.json, .yaml, .yml); other
    extensions are tried as JSON first, then YAML.

    Raises:
        DocumentError: If the file is missing or cannot be parsed
    """
    if not path.exists():
        raise DocumentError(f"File not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(content)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(content)
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"Invalid syntax in {path}: {e}") from e


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    A relative ``schema`` path is resolved against the configuration file's
    directory.

    Raises:
        ConfigError: If the file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> config = load_config(Path("formulary.yaml"))
        >>> config["phone_region"]
        'NL'
    """
    try:
        config = load_document(path)
    except DocumentError as e:
        raise ConfigError(f"Configuration error: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Configuration file must contain a mapping, got: {type(config).__name__}"
        )

    schema = config.get("schema")
    if isinstance(schema, str) and not Path(schema).is_absolute():
        config["schema"] = str(path.parent / schema)

    return config


def merge_config(config: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into file configuration; non-None arguments win.

    Example:
        >>> merge_config({"log_level": "info"}, log_level="debug", schema=None)
        {'log_level': 'debug'}
    """
    merged = dict(config)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Check keys and value types of a merged configuration.

    Raises:
        ConfigError: For unknown keys or invalid values
    """
    unknown = set(config) - KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(sorted(KNOWN_KEYS))}"
        )

    log_level = config.get("log_level")
    if log_level is not None and str(log_level).lower() not in LOG_LEVELS:
        raise ConfigError(f"Invalid log_level '{log_level}'. Must be one of: {', '.join(LOG_LEVELS)}")

    report_format = config.get("format")
    if report_format is not None and report_format not in REPORT_FORMATS:
        raise ConfigError(
            f"Invalid format '{report_format}'. Must be one of: {', '.join(REPORT_FORMATS)}"
        )

    region = config.get("phone_region")
    if region is not None and not isinstance(region, str):
        raise ConfigError(f"phone_region must be a string, got: {type(region).__name__}")

    strict = config.get("strict")
    if strict is not None and not isinstance(strict, bool):
        raise ConfigError(f"strict must be a boolean, got: {type(strict).__name__}")

    if "schema" in config and not isinstance(config["schema"], str):
        raise ConfigError("schema must be a file path")
