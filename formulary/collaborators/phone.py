"""Phone number collaborator backed by the ``phonenumbers`` library."""

import re
from typing import Any

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

from formulary.core.exceptions import CollaboratorError

FORMATS = {
    "e164": PhoneNumberFormat.E164,
    "international": PhoneNumberFormat.INTERNATIONAL,
    "national": PhoneNumberFormat.NATIONAL,
    "rfc3966": PhoneNumberFormat.RFC3966,
}


class PhoneNumbers:
    """Parse, validate and format phone numbers.

    Numbers without a leading ``+`` can only be parsed when ``default_region``
    (an ISO 3166 code such as ``"NL"``) is set.
    """

    def __init__(self, default_region: str | None = None) -> None:
        self.default_region = default_region

    def _parse(self, raw: Any) -> phonenumbers.PhoneNumber | None:
        if not isinstance(raw, str):
            return None
        try:
            return phonenumbers.parse(raw, self.default_region)
        except NumberParseException:
            return None

    def validate(self, raw: Any) -> bool:
        number = self._parse(raw)
        return number is not None and phonenumbers.is_valid_number(number)

    def format(self, raw: str, fmt: str = "international") -> str:
        """Format a valid number; invalid input is returned unchanged.

        Raises:
            CollaboratorError: If ``fmt`` is not a known format name
        """
        if fmt not in FORMATS:
            msg = f"Unknown phone format '{fmt}'. Available: {', '.join(sorted(FORMATS))}"
            raise CollaboratorError(msg, collaborator="phone", operation="format", reason=fmt)

        number = self._parse(raw)
        if number is None or not phonenumbers.is_valid_number(number):
            return raw
        return phonenumbers.format_number(number, FORMATS[fmt])

    def clear(self, raw: str) -> str:
        """Strip everything but digits, keeping a leading ``+``."""
        digits = re.sub(r"\D", "", raw)
        return f"+{digits}" if raw.strip().startswith("+") else digits
