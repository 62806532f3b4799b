"""Shared fixtures and Hypothesis configuration for formulary tests."""

from datetime import datetime

import pytest
from hypothesis import settings

from formulary import Collaborators, Engine, default_collaborators
from formulary.collaborators import Dates, ObjectIds, PhoneNumbers

settings.register_profile("formulary", max_examples=100, deadline=None)
settings.load_profile("formulary")


class ExplodingDates(Dates):
    """Date collaborator whose parser always raises."""

    def parse_to_date(self, raw, fmt=None, offset_hours=0) -> datetime | None:
        raise RuntimeError("date backend unavailable")


@pytest.fixture
def engine() -> Engine:
    """Engine with the bundled rules and library-backed collaborators."""
    return Engine()


@pytest.fixture
def nl_engine() -> Engine:
    """Engine that parses phone numbers without "+" as Dutch numbers."""
    return Engine(collaborators=default_collaborators("NL"))


@pytest.fixture
def exploding_engine() -> Engine:
    """Engine whose date collaborator raises on every call."""
    return Engine(
        collaborators=Collaborators(
            phones=PhoneNumbers(),
            ids=ObjectIds(),
            dates=ExplodingDates(),
        )
    )
