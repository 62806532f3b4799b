"""Date collaborator.

Explicit formats are ``datetime.strptime`` directives (``"%d.%m.%Y"``); a
list of formats is tried in order. Without a format, strings go through
``dateutil.parser``. Numbers are epoch milliseconds.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser

from formulary.core.exceptions import CollaboratorError


class Dates:
    def parse_to_date(
        self, raw: Any, fmt: str | list[str] | None = None, offset_hours: float = 0
    ) -> datetime | None:
        """Parse ``raw`` and shift it by ``offset_hours``.

        Returns:
            The parsed datetime, or None when ``raw`` is not a valid date

        Raises:
            CollaboratorError: If ``fmt`` is not a string, a list of strings
                               or None, or contains a bad directive
        """
        parsed = self._parse(raw, fmt)
        if parsed is None:
            return None
        return parsed + timedelta(hours=offset_hours)

    def is_valid(self, raw: Any, fmt: str | list[str] | None = None) -> bool:
        return self._parse(raw, fmt) is not None

    def _parse(self, raw: Any, fmt: str | list[str] | None) -> datetime | None:
        if isinstance(raw, datetime):
            return raw
        if isinstance(raw, date):
            return datetime(raw.year, raw.month, raw.day)
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            try:
                return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return None
        if not isinstance(raw, str):
            return None

        if fmt is None:
            try:
                return date_parser.parse(raw)
            except (ValueError, OverflowError):
                return None

        formats = [fmt] if isinstance(fmt, str) else fmt
        if not isinstance(formats, (list, tuple)) or not all(isinstance(f, str) for f in formats):
            msg = f"Date format must be a string or a list of strings, got: {fmt!r}"
            raise CollaboratorError(msg, collaborator="date", operation="parse", reason="Invalid format")

        for candidate in formats:
            try:
                return datetime.strptime(raw, candidate)
            except ValueError as e:
                if "bad directive" in str(e):
                    msg = f"Invalid date format {candidate!r}"
                    raise CollaboratorError(
                        msg, collaborator="date", operation="parse", reason=str(e)
                    ) from e
        return None
