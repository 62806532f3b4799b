"""Filters that delegate to the phone, date and identifier collaborators."""

from collections.abc import Mapping

from formulary.core.registry import filter_rule


@filter_rule("toDate")
def to_date(accepted, value, field):
    """Parse the value into a datetime, optionally shifted by ``offset`` hours.

    ``accepted`` is ``True`` (free-form parsing), a strptime format or list of
    formats, or ``{"format": ..., "offset": hours}``. Unparsable values are
    left unchanged so that a later ``type: date`` check can report them.
    """
    if not value:
        return value

    fmt = None
    offset = 0
    if isinstance(accepted, Mapping):
        fmt = accepted.get("format")
        offset = accepted.get("offset") or 0
    elif isinstance(accepted, (str, list, tuple)):
        fmt = accepted

    parsed = field.collaborators.dates.parse_to_date(value, fmt, offset)
    return value if parsed is None else parsed


@filter_rule("toObjectId")
def to_object_id(accepted, value, field):
    """Convert a valid identifier string into an ObjectId."""
    ids = field.collaborators.ids
    if ids.is_valid(value):
        return ids.to_id(value)
    return value


@filter_rule("toE164")
def to_e164(accepted, value, field):
    """Format a valid phone number as E.164 (``+31201234567``)."""
    if field.is_string():
        return field.collaborators.phones.format(value, "e164")
    return value


@filter_rule("clearPhone")
def clear_phone(accepted, value, field):
    """Strip everything but digits and a leading ``+``."""
    if field.is_string():
        return field.collaborators.phones.clear(value)
    return value
