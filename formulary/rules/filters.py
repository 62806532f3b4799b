"""Value-transforming filters.

Filters always return a value. Type-guarded filters hand back the value
unchanged when it is not theirs to transform.
"""

import math
import re
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext

from formulary.core.kinds import MISSING, kind_of
from formulary.core.registry import filter_rule
from formulary.rules import parameters
from formulary.rules.parsing import parse_float, parse_int
from formulary.rules.values import contains

TRUE_TOKENS = frozenset({"yes", "true", "y", "1"})
FALSE_TOKENS = frozenset({"no", "false", "n", "0"})


@filter_rule("default")
def default(accepted, value, field):
    """Fill in a literal, or call a zero-argument producer, when the value is absent."""
    if value is MISSING:
        return accepted() if callable(accepted) else accepted
    return value


@filter_rule("forceValue")
def force_value(accepted, value, field):
    """Replace the value with ``accepted["value"]`` when ``accepted["isEnabled"]``."""
    if isinstance(accepted, Mapping) and accepted.get("isEnabled"):
        return accepted.get("value")
    return value


@filter_rule("bounds", accepts=parameters.number_range)
def bounds(accepted, value, field):
    """Clamp a number into ``[low, high)``: values at or above ``high`` become ``high``."""
    if not field.is_number():
        return value

    low, high = accepted
    if value < low:
        return low
    if value >= high:
        return high
    return value


@filter_rule("trim")
def trim(accepted, value, field):
    if field.is_string():
        return value.strip()
    return value


@filter_rule("toLowerCase")
def to_lower_case(accepted, value, field):
    if field.is_string():
        return value.lower()
    return value


@filter_rule("toUpperCase")
def to_upper_case(accepted, value, field):
    if field.is_string():
        return value.upper()
    return value


@filter_rule("toInteger")
def to_integer(accepted, value, field):
    """Parse a leading integer; unparsable input becomes 0."""
    if field.is_number():
        return value
    return parse_int(value) or 0


@filter_rule("toFloat")
def to_float(accepted, value, field):
    """Parse a leading float; unparsable input becomes NaN."""
    if field.is_number():
        return value
    return parse_float(value)


@filter_rule("toFixed", accepts=parameters.size)
def to_fixed(accepted, value, field):
    """Parse, then round half up to ``accepted`` decimal places."""
    number = value if field.is_number() else parse_float(value)
    if isinstance(number, float) and not math.isfinite(number):
        return number

    digits = int(accepted)
    exact = Decimal(str(number))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return float(rounded)


@filter_rule("toBoolean")
def to_boolean(accepted, value, field):
    """Map yes/true/y/1 and no/false/n/0 (any case) to booleans."""
    if not field.is_string():
        return value

    token = value.lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    return value


@filter_rule("toArray")
def to_array(accepted, value, field):
    """Split a string on ``accepted`` (a separator or pattern), or on commas."""
    if not field.is_string():
        return value

    if isinstance(accepted, re.Pattern):
        return accepted.split(value)
    if isinstance(accepted, str):
        return value.split(accepted) if accepted else list(value)
    return value.split(",")


@filter_rule("toRegexp")
def to_regexp(accepted, value, field):
    """Compile a string into a case-insensitive pattern, optionally anchored at the start."""
    if not field.is_string():
        return value

    if isinstance(accepted, Mapping) and accepted.get("fromStart"):
        return re.compile(f"^{value}", re.IGNORECASE)
    return re.compile(value, re.IGNORECASE)


@filter_rule("uniqueItems")
def unique_items(accepted, value, field):
    """Drop repeated elements, keeping the first occurrence.

    Elements are compared kind-aware, so ``True`` and ``1`` are both kept.
    """
    if not field.is_array():
        return value

    unique: list = []
    seen: set = set()
    for item in value:
        key = (kind_of(item), item)
        try:
            if key in seen:
                continue
            seen.add(key)
        except TypeError:
            if contains(unique, item):
                continue
        unique.append(item)
    return unique


@filter_rule("replace", accepts=parameters.find_replace)
def replace(accepted, value, field):
    """Replace the first occurrence of ``accepted[0]`` with ``accepted[1]``."""
    if not field.is_string():
        return value

    find, replacement = accepted
    if isinstance(find, re.Pattern):
        return find.sub(replacement, value, count=1)
    return value.replace(find, replacement, 1)


@filter_rule("sanitizeRegex")
def sanitize_regex(accepted, value, field):
    """Escape regular expression metacharacters."""
    if field.is_string():
        return re.escape(value)
    return value


@filter_rule("clearFormField")
def clear_form_field(accepted, value, field):
    """Strip every character that is not an ASCII letter or digit."""
    if field.is_string():
        return re.sub(r"[^a-zA-Z0-9]+", "", value)
    return value


@filter_rule("toCoords")
def to_coords(accepted, value, field):
    """Split "lng,lat" into a list of floats."""
    if field.is_string():
        return [parse_float(token) for token in value.split(",")]
    return value
