"""Parameter shapes for rules declared in recipes.

Each predicate's docstring is the phrase used in the RecipeError raised when a
recipe declares a parameter of the wrong shape, e.g.
``'minimum' expects a number, got: '3'``.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from formulary.core.kinds import ValueKind, is_number, is_string

TYPE_NAMES = frozenset({kind.value for kind in ValueKind} | {"objectId", "date"})


def _finite(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def number(accepted: Any) -> bool:
    """a finite number"""
    return _finite(accepted)


def divisor(accepted: Any) -> bool:
    """a non-zero number"""
    return _finite(accepted) and accepted != 0


def size(accepted: Any) -> bool:
    """a non-negative integer"""
    return _finite(accepted) and accepted >= 0 and accepted == int(accepted)


def number_range(accepted: Any) -> bool:
    """a [low, high] pair of numbers"""
    return (
        isinstance(accepted, (list, tuple))
        and len(accepted) == 2
        and all(_finite(bound) for bound in accepted)
        and accepted[0] <= accepted[1]
    )


def find_replace(accepted: Any) -> bool:
    """a [find, replacement] pair of a string or pattern and a string"""
    return (
        isinstance(accepted, (list, tuple))
        and len(accepted) == 2
        and isinstance(accepted[0], (str, re.Pattern))
        and is_string(accepted[1])
    )


def options(accepted: Any) -> bool:
    """a list of options"""
    return isinstance(accepted, (list, tuple, set, frozenset))


def languages(accepted: Any) -> bool:
    """a list of language codes"""
    return isinstance(accepted, (list, tuple)) and all(is_string(code) for code in accepted)


def language(accepted: Any) -> bool:
    """a language code"""
    return is_string(accepted) and accepted != ""


def pattern(accepted: Any) -> bool:
    """a regular expression string or compiled pattern"""
    return isinstance(accepted, (str, re.Pattern))


def type_name(accepted: Any) -> bool:
    """one of: array, boolean, date, null, number, object, objectId, string, undefined"""
    return is_string(accepted) and accepted in TYPE_NAMES


def property_names(accepted: Any) -> bool:
    """a list of property names"""
    return isinstance(accepted, (list, tuple)) and all(is_string(name) for name in accepted)


def schemas(accepted: Any) -> bool:
    """a list of schemas"""
    return isinstance(accepted, (list, tuple))


def mapping(accepted: Any) -> bool:
    """a mapping"""
    return isinstance(accepted, Mapping)
