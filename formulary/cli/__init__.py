"""CLI interface for formulary.

This package provides command-line access to the validation engine: validate
JSON/YAML documents against schema files, check schemas, and list the
available rules.
"""
