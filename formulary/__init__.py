"""formulary: schema-driven validation and transformation.

A schema ("recipe") lists rules in the order they run. Filters transform the
value, validators judge it, and composite rules (properties, items, oneOf)
recurse into nested values. The result is a Report: the transformed value
plus every Issue found, each with the path where it occurred.

    >>> from formulary import validate_sync
    >>> report = validate_sync({}, {"type": "object", "required": ["name"]})
    >>> [issue.path for issue in report.issues]
    [('name',)]
"""

from formulary.collaborators import Collaborators, default_collaborators
from formulary.core.exceptions import (
    CollaboratorError,
    FieldStateError,
    FormularyError,
    RecipeError,
    UnknownRuleError,
)
from formulary.core.field import Field
from formulary.core.kinds import MISSING, ValueKind, kind_of
from formulary.core.protocols import Fail, Issues, Pass, Rule, RuleKind, RuleOutcome
from formulary.core.recipe import Recipe, check_recipe, normalize
from formulary.core.registry import (
    RuleRegistry,
    build_registry,
    default_registry,
    filter_rule,
    validator,
)
from formulary.core.report import Issue, Report, merge
from formulary.engine import Engine, validate, validate_sync

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "Engine",
    "validate",
    "validate_sync",
    # Data model
    "Field",
    "Issue",
    "Report",
    "Recipe",
    "merge",
    "normalize",
    "check_recipe",
    "MISSING",
    "ValueKind",
    "kind_of",
    # Rules
    "Rule",
    "RuleKind",
    "RuleRegistry",
    "RuleOutcome",
    "Pass",
    "Fail",
    "Issues",
    "build_registry",
    "default_registry",
    "validator",
    "filter_rule",
    # Collaborators
    "Collaborators",
    "default_collaborators",
    # Exceptions
    "FormularyError",
    "RecipeError",
    "UnknownRuleError",
    "FieldStateError",
    "CollaboratorError",
]
