"""Type and shape validators."""

from datetime import date

from formulary.core.kinds import is_number
from formulary.core.registry import validator
from formulary.rules import parameters


@validator("type", accepts=parameters.type_name)
def type_(accepted, value, field):
    """Check the value's kind; null satisfies object, string, objectId and date."""
    if field.is_undefined():
        return True

    if accepted == "object":
        result = field.is_object() or field.is_null()
    elif accepted == "array":
        result = field.is_array()
    elif accepted == "string":
        result = field.is_string() or field.is_null()
    elif accepted == "objectId":
        result = field.is_null() or field.collaborators.ids.is_valid(value)
    elif accepted == "date":
        result = value == "" or field.is_null() or isinstance(value, date)
    else:
        result = field.kind().value == accepted

    if not result:
        return {"value": value, "accept": accepted, "current": field.kind().value}

    return True


@validator("isString")
def is_string(accepted, value, field):
    return field.is_string()


@validator("isBool")
def is_bool(accepted, value, field):
    return field.is_bool()


@validator("isNumber")
def is_number_(accepted, value, field):
    return field.is_number()


@validator("isInteger")
def is_integer(accepted, value, field):
    """Check for a number without a fractional part."""
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    try:
        return value == int(value)
    except (OverflowError, ValueError):
        return False


@validator("isArray")
def is_array(accepted, value, field):
    return field.is_array()


@validator("isObjectId")
def is_object_id(accepted, value, field):
    """Check for null or a valid ObjectId."""
    return field.is_null() or field.collaborators.ids.is_valid(value)


@validator("isDate")
def is_date(accepted, value, field):
    """Check that the date collaborator can parse the value; null passes."""
    if field.is_null() or field.is_undefined():
        return True

    fmt = None if accepted is True else accepted
    return field.collaborators.dates.is_valid(value, fmt)
