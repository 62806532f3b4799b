"""Value kinds and capability predicates.

Every value the engine sees falls into exactly one ValueKind. Rules ask
questions about the current value through the predicates below (also
exposed on Field), never through ad hoc isinstance checks, so "is this a
string" means the same thing in every rule.

The MISSING sentinel stands for an absent value: a property that is not
present in its parent, or a root call made without a value.
"""

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any


class _Missing:
    """Sentinel type for an absent value."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ValueKind(Enum):
    """Closed set of runtime kinds a value can have.

    The enum values double as the kind names reported in issues and accepted
    by the ``type`` rule's default branch.
    """

    STRING = "string"
    BOOL = "boolean"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    UNDEFINED = "undefined"


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    bool is checked before numbers because it is an int subclass. Mappings
    and any other non-primitive instance (datetime, ObjectId, ...) are
    OBJECT; lists and tuples are ARRAY.
    """
    if value is MISSING:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OBJECT


def is_string(value: Any) -> bool:
    return kind_of(value) is ValueKind.STRING


def is_bool(value: Any) -> bool:
    return kind_of(value) is ValueKind.BOOL


def is_number(value: Any) -> bool:
    return kind_of(value) is ValueKind.NUMBER


def is_object(value: Any) -> bool:
    return kind_of(value) is ValueKind.OBJECT


def is_array(value: Any) -> bool:
    return kind_of(value) is ValueKind.ARRAY


def is_null(value: Any) -> bool:
    return kind_of(value) is ValueKind.NULL


def is_undefined(value: Any) -> bool:
    return kind_of(value) is ValueKind.UNDEFINED


def is_mapping(value: Any) -> bool:
    """True for OBJECT values whose keys can be inspected."""
    return is_object(value) and isinstance(value, Mapping)


# Capability predicates by the names rules and recipes use for them.
CAPABILITIES = {
    "isString": is_string,
    "isBool": is_bool,
    "isNumber": is_number,
    "isObject": is_object,
    "isArray": is_array,
    "isNull": is_null,
    "isUndefined": is_undefined,
}
