"""Language maps: objects keyed by language code plus a ``default`` entry.

    {"default": "Hello", "nl": "Hallo"}
"""

from formulary.core.registry import filter_rule, validator
from formulary.rules import parameters

DEFAULT_KEY = "default"


def _allowed(languages) -> set:
    return {*languages, DEFAULT_KEY}


@validator("langMap", accepts=parameters.languages)
def lang_map(accepted, value, field):
    """Check that every key is an allowed language or ``default``."""
    if not field.is_mapping():
        return True

    allowed = _allowed(accepted)
    return all(key in allowed for key in value)


@validator("langMapRequired", accepts=parameters.languages)
def lang_map_required(accepted, value, field):
    """Like langMap, and every entry must be non-empty. An empty map passes."""
    if not field.is_mapping():
        return True

    allowed = _allowed(accepted)
    return all(key in allowed and bool(text) for key, text in value.items())


@filter_rule("langMapDefault", accepts=parameters.language)
def lang_map_default(accepted, value, field):
    """Copy the ``default`` entry into the ``accepted`` locale when that is missing."""
    if not field.is_mapping() or not value.get(DEFAULT_KEY):
        return value

    if value.get(accepted):
        return value

    return {**value, accepted: value[DEFAULT_KEY]}
