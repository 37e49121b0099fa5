"""Tests for the injected lookup tables."""

import pytest
from pydantic import ValidationError

from src.models.lookups import AliasTable, DayCalendar, ExtractionVocabulary


class TestAliasTable:
    def test_keys_are_case_folded(self):
        table = AliasTable.from_mapping({"Spectre": "Spectre", "CONDE": "Spectre"})
        assert table.aliases == {"spectre": "Spectre", "conde": "Spectre"}
        assert table.resolve("Conde") == "Spectre"
        assert table.resolve("unknown") is None
        assert len(table) == 2

    def test_is_immutable(self):
        table = AliasTable.from_mapping({"conde": "Spectre"})
        with pytest.raises(ValidationError):
            table.aliases = {}


class TestExtractionVocabulary:
    def test_terms_are_folded_and_blank_terms_dropped(self):
        vocabulary = ExtractionVocabulary(event_keywords=("Pichanga", " "), time_labels=("HORA:",))
        assert vocabulary.event_keywords == ("pichanga",)
        assert vocabulary.time_labels == ("hora:",)

    def test_mapping_cannot_be_edited_in_place(self):
        table = AliasTable.from_mapping({"conde": "Spectre"})
        with pytest.raises(TypeError):
            table.aliases["x"] = "y"
        assert table.resolve("x") is None

    def test_dumps_as_plain_dict(self):
        table = AliasTable.from_mapping({"Conde": "Spectre"})
        assert table.model_dump() == {"aliases": {"conde": "Spectre"}}


class TestDayCalendarMapping:
    def test_day_aliases_cannot_be_edited_in_place(self):
        calendar = DayCalendar()
        with pytest.raises(TypeError):
            calendar.day_aliases["lunes"] = "viernes"
        assert not calendar.is_allowed("lunes")
