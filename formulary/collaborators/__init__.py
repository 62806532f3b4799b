"""External collaborators used by rules.

Rules never talk to third-party libraries directly: phone numbers, dates and
identifiers go through the services bundled in Collaborators, which the
engine hands to every Field. Tests and applications can swap any of them.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Protocol

from formulary.collaborators.dates import Dates
from formulary.collaborators.identifiers import ObjectIds
from formulary.collaborators.phone import PhoneNumbers


class PhoneService(Protocol):
    def format(self, raw: str, fmt: str = "international") -> str:
        ...

    def validate(self, raw: Any) -> bool:
        ...

    def clear(self, raw: str) -> str:
        ...


class IdService(Protocol):
    def is_valid(self, raw: Any) -> bool:
        ...

    def to_id(self, raw: Any) -> Any:
        ...


class DateService(Protocol):
    def parse_to_date(
        self, raw: Any, fmt: str | list[str] | None = None, offset_hours: float = 0
    ) -> datetime | None:
        ...

    def is_valid(self, raw: Any, fmt: str | list[str] | None = None) -> bool:
        ...


@dataclass(frozen=True)
class Collaborators:
    """The phone, identifier and date services available to rules."""

    phones: PhoneService
    ids: IdService
    dates: DateService


@lru_cache(maxsize=None)
def default_collaborators(phone_region: str | None = None) -> Collaborators:
    """Library-backed collaborators; ``phone_region`` applies to numbers without ``+``."""
    return Collaborators(
        phones=PhoneNumbers(default_region=phone_region),
        ids=ObjectIds(),
        dates=Dates(),
    )


__all__ = [
    "Collaborators",
    "DateService",
    "Dates",
    "IdService",
    "ObjectIds",
    "PhoneNumbers",
    "PhoneService",
    "default_collaborators",
]
