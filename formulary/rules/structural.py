"""Composite rules that recurse into nested values.

properties and items fan out one child Field per property / element and run
them concurrently; merge() folds the child reports back in. oneOf tries its
alternatives one after another and stops at the first clean report.
"""

import logging

from formulary.core.field import gather_reports
from formulary.core.kinds import MISSING
from formulary.core.protocols import Issues
from formulary.core.recipe import normalize
from formulary.core.registry import validator
from formulary.core.report import Issue, merge
from formulary.rules import parameters

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is MISSING or value is None or value == ""


@validator("required", accepts=parameters.property_names)
def required(accepted, value, field):
    """Check that the named properties are present and neither empty nor null."""
    if not accepted or field.is_null():
        return True

    if not field.is_mapping():
        return False

    return [
        Issue(path=(name,), rule="required", accepted=True, current=False)
        for name in accepted
        if _is_blank(value.get(name, MISSING))
    ]


def _resolve_property(value, name, recipe):
    if name in value:
        return value[name]
    if "default" in recipe:
        default = recipe["default"]
        return default() if callable(default) else default
    if recipe.get("acceptEmpty"):
        return ""
    return MISSING


@validator("properties", accepts=parameters.mapping)
async def properties(accepted, value, field):
    """Validate declared properties concurrently and rebuild the object from them.

    A property that is absent and has neither a ``default`` nor
    ``acceptEmpty`` is left out of the output. Undeclared keys are dropped.
    """
    if field.is_null():
        return True

    if not field.is_mapping():
        return False

    children = []
    for name, schema in accepted.items():
        recipe = normalize(schema, field.path + (name,))
        child_value = _resolve_property(value, name, recipe)
        if child_value is MISSING:
            continue
        children.append((name, field.child(name, child_value, recipe)))

    merged = merge(await gather_reports(children), dict)
    return Issues(merged.issues, value=merged.value)


@validator("items")
async def items(accepted, value, field):
    """Validate every array element concurrently against one schema."""
    if not field.is_array():
        return False

    recipe = normalize(accepted, field.path)
    children = [(index, field.child(index, item, recipe)) for index, item in enumerate(value)]

    merged = merge(await gather_reports(children), list)
    return Issues(merged.issues, value=merged.value)


@validator("oneOf", accepts=parameters.schemas)
async def one_of(accepted, value, field):
    """Pass when the first alternative, in order, validates without issues."""
    for index, schema in enumerate(accepted):
        report = await field.alternative(schema).evaluate()
        if not report.has_issues():
            return True
        logger.debug(
            "oneOf alternative %d rejected %s: %s",
            index,
            field.path,
            [(issue.path, issue.rule) for issue in report.issues],
        )

    return False
