"""Bundled rule catalog.

Each module declares its rules with @validator / @filter_rule; the default
registry is built from RULE_MODULES.
"""

from formulary.rules import bounds, external, filters, locales, patterns, structural, types, values

RULE_MODULES = (types, values, patterns, bounds, locales, structural, filters, external)

__all__ = ["RULE_MODULES"]
