"""Shared test fixtures for the roster pipeline."""

from datetime import datetime
from typing import Sequence

import pytest

from src.models.event import Event
from src.models.lookups import AliasTable, DayCalendar, ExtractionVocabulary
from src.parsing.timestamps import TimestampNormalizer

FIXED_NOW = datetime(2030, 1, 1, 12, 0, 0)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def timestamps(fixed_clock) -> TimestampNormalizer:
    return TimestampNormalizer(clock=fixed_clock)


@pytest.fixture
def alias_table() -> AliasTable:
    return AliasTable.from_mapping({"conde": "Spectre", "Spectre": "Spectre", "Deyler": "Dayler"})


@pytest.fixture
def calendar() -> DayCalendar:
    return DayCalendar()


@pytest.fixture
def vocabulary() -> ExtractionVocabulary:
    return ExtractionVocabulary()


def make_event(
    day: str = "viernes",
    date: str = "25/07/25",
    instant: datetime = datetime(2025, 7, 25, 9, 0, 0),
    sender: str = "Alex",
    players: Sequence[str] = (),
    fallback: bool = False,
) -> Event:
    return Event(
        name="Pichanga",
        day_of_week=day,
        date=date,
        players=list(players),
        source_timestamp=f"{date}, {instant:%H:%M:%S}",
        source_instant=instant,
        instant_is_fallback=fallback,
        sender=sender,
    )


@pytest.fixture
def event_factory():
    return make_event


SAMPLE_CHAT = [
    "[24/07/25, 10:00:00 a. m.] Alex: Pichanga viernes",
    "Día: viernes",
    "Hora: 9:00",
    "Lugar: Potokar",
    "1. - Alex",
    "2. Moises(4)",
    "3. -",
    "",
    "[24/07/25, 10:05:00 a. m.] Bruno: Hola a todos",
    "[24/07/25, 6:30:00 p. m.] Alex: Pichanga viernes",
    "Día: viernes",
    "1. Alex",
    "2. Moises(4)",
    "3. conde",
    "[25/07/25, 8:00:00 a. m.] Carla: Pichanga lunes",
    "Día: lunes",
    "1. Carla",
    "[30/07/25, 12:13:12 p. m.] Carla: Pichanga miercoles",
    "Dia: miercoles",
    "1. Carla",
    "2. 🔥Juan Pérez-",
    "3. Alex",
    "4. Spectre",
]


@pytest.fixture
def sample_chat():
    return list(SAMPLE_CHAT)
