"""Value-set validators.

Comparisons are kind-aware: ``True`` does not equal ``1`` and ``1`` does not
equal ``"1"``.
"""

from typing import Any

from formulary.core.kinds import kind_of
from formulary.core.registry import validator
from formulary.rules import parameters


def same(a: Any, b: Any) -> bool:
    return kind_of(a) is kind_of(b) and a == b


def contains(options: Any, value: Any) -> bool:
    return any(same(option, value) for option in options)


@validator("equals")
def equals(accepted, value, field):
    return same(accepted, value)


@validator("notEquals")
def not_equals(accepted, value, field):
    return not same(accepted, value)


@validator("enum", accepts=parameters.options)
def enum(accepted, value, field):
    """Check membership in the accepted options; null always passes."""
    return field.is_null() or contains(accepted, value)


@validator("exclude", accepts=parameters.options)
def exclude(accepted, value, field):
    return not contains(accepted, value)
