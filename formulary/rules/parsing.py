"""Lenient number parsing shared by coercion filters and coordinate rules.

Strings are read up to the first character that cannot continue a number,
so ``"12px"`` parses as 12. Anything else is parsed from its ``str()``.
"""

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")


def parse_int(value: Any) -> int | None:
    """Leading integer of ``value``, or None when there is none."""
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def parse_float(value: Any) -> float:
    """Leading float of ``value``, or NaN when there is none."""
    match = _FLOAT_PREFIX.match(str(value))
    if match is None:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))
