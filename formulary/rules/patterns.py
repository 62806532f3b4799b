"""Pattern validators: regular expressions, e-mail, UUID, URL, coordinates."""

import math
import re
from urllib.parse import urlsplit

from formulary.core.kinds import is_number
from formulary.core.registry import validator
from formulary.rules import parameters
from formulary.rules.parsing import parse_float

EMAIL_RE = re.compile(
    r"[a-z0-9._+-]+@((\d{1,3}\.){3}\d{1,3}|[a-z0-9-]{2,}(\.[a-z0-9]{2,})*)", re.IGNORECASE
)
UUID_RE = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)
EMOJI_RE = re.compile("\u00a9|\u00ae|[\u2000-\u3300]|[\U0001F000-\U0001FBFF]")
SHORT_TIME_RE = re.compile(r"[0-2][0-9]:[0-5][0-9]")


def _search(pattern, value: str) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(value) is not None
    return re.search(pattern, value) is not None


def _fullmatch(pattern: re.Pattern, value) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


@validator("regexp", accepts=parameters.pattern)
def regexp(accepted, value, field):
    """Check a string against a pattern; other values pass."""
    if not field.is_string():
        return True
    return _search(accepted, value)


@validator("pattern", accepts=parameters.pattern)
def pattern(accepted, value, field):
    """Like regexp, but abstains instead of passing on non-strings."""
    if field.is_string():
        return _search(accepted, value)
    return None


@validator("email")
def email(accepted, value, field):
    return _fullmatch(EMAIL_RE, value) == accepted


@validator("emailOrPhone")
def email_or_phone(accepted, value, field):
    """Check for an e-mail address or a valid phone number."""
    return _fullmatch(EMAIL_RE, value) or field.collaborators.phones.validate(value)


@validator("emoji")
def emoji(accepted, value, field):
    return _fullmatch(EMOJI_RE, value) == accepted


@validator("uuid")
def uuid(accepted, value, field):
    if not value or not field.is_string():
        return True
    return _fullmatch(UUID_RE, value) == accepted


@validator("shortTime")
def short_time(accepted, value, field):
    """Check for an HH:MM time."""
    found = field.is_string() and SHORT_TIME_RE.search(value) is not None
    return found == accepted


def url_components(value: str) -> dict:
    """Split a URL into WHATWG-style components plus the urlsplit names.

    ``port`` is a string, as in ``new URL(...).port``. ``search`` and
    ``hash`` keep their leading ``?`` / ``#`` and are None when empty.
    """
    parts = urlsplit(value)
    port = parts.port
    auth = None
    if parts.username is not None:
        auth = parts.username if parts.password is None else f"{parts.username}:{parts.password}"
    return {
        "href": parts.geturl(),
        "scheme": parts.scheme,
        "protocol": f"{parts.scheme}:" if parts.scheme else None,
        "netloc": parts.netloc,
        "host": parts.netloc,
        "hostname": parts.hostname,
        "port": None if port is None else str(port),
        "auth": auth,
        "username": parts.username,
        "password": parts.password,
        "path": parts.path,
        "pathname": parts.path,
        "query": parts.query,
        "search": f"?{parts.query}" if parts.query else None,
        "fragment": parts.fragment,
        "hash": f"#{parts.fragment}" if parts.fragment else None,
    }


def _component_matches(expected, actual) -> bool:
    if isinstance(expected, re.Pattern):
        return expected.search("" if actual is None else actual) is not None
    if is_number(expected) and actual is not None:
        return str(expected) == actual
    return expected == actual


@validator("url", accepts=parameters.mapping)
def url(accepted, value, field):
    """Match parsed URL components against values or patterns.

    ``{"scheme": "https", "hostname": re.compile(r"\\.example\\.com$")}``
    requires every named component to be equal to, or match, its entry.
    A numeric entry is compared as text, so ``{"port": 8080}`` matches.
    """
    if not field.is_string():
        return False

    try:
        components = url_components(value)
    except ValueError:
        return False

    return all(
        name in components and _component_matches(expected, components[name])
        for name, expected in accepted.items()
    )


@validator("isCoordsString")
def is_coords_string(accepted, value, field):
    """Check for a "longitude,latitude" string within range."""
    if not field.is_string():
        return False

    tokens = value.split(",")
    if len(tokens) != 2:
        return False

    lng, lat = (parse_float(token) for token in tokens)
    if math.isnan(lng) or math.isnan(lat):
        return False

    return -180 <= lng <= 180 and -90 <= lat <= 90
