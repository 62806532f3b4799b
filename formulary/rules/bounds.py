"""Numeric and length bounds.

Numeric rules abstain on non-numbers. Length rules fail on anything that is
neither a string nor an array; string lengths are measured after trimming
(except for the exact ``length`` rule).
"""

from formulary.core.registry import validator
from formulary.rules import parameters


@validator("minimum", accepts=parameters.number)
def minimum(accepted, value, field):
    if field.is_number():
        return accepted <= value
    return None


@validator("maximum", accepts=parameters.number)
def maximum(accepted, value, field):
    if field.is_number():
        return accepted >= value
    return None


@validator("modulo", accepts=parameters.divisor)
def modulo(accepted, value, field):
    """Check that the number is a multiple of ``accepted``."""
    if field.is_number():
        return value % accepted == 0
    return None


def _measure(value, field, trim: bool) -> int | None:
    if field.is_string():
        return len(value.strip() if trim else value)
    if field.is_array():
        return len(value)
    return None


@validator("length", accepts=parameters.size)
def length(accepted, value, field):
    size = _measure(value, field, trim=False)
    return size is not None and size == accepted


@validator("minLength", accepts=parameters.size)
def min_length(accepted, value, field):
    size = _measure(value, field, trim=True)
    return size is not None and size >= accepted


@validator("maxLength", accepts=parameters.size)
def max_length(accepted, value, field):
    size = _measure(value, field, trim=True)
    return size is not None and size <= accepted
