"""Immutable lookup tables injected into the pipeline stages."""

import unicodedata
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _fold(text: str) -> str:
    return unicodedata.normalize("NFC", text).strip().lower()


class AliasTable(BaseModel):
    """Maps a lower-cased player token to the canonical display name."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    aliases: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("aliases")
    @classmethod
    def _fold_keys(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        folded: Dict[str, str] = {}
        for alias, canonical in value.items():
            # First spelling wins if two keys fold to the same text
            folded.setdefault(_fold(alias), canonical)
        return MappingProxyType(folded)

    @field_serializer("aliases")
    def _dump_aliases(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "AliasTable":
        return cls(aliases=dict(mapping))

    def resolve(self, name: str) -> Optional[str]:
        """Exact, case-insensitive lookup. Returns None when no alias is configured."""
        return self.aliases.get(_fold(name))

    def __len__(self) -> int:
        return len(self.aliases)


class DayCalendar(BaseModel):
    """Allowed weekdays plus the spelling variants that collapse onto them."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    allowed_days: Tuple[str, ...] = ("viernes", "miércoles")
    day_aliases: Mapping[str, str] = Field(
        default_factory=lambda: {
            "vienes": "viernes",
            "viernes": "viernes",
            "miercoles": "miércoles",
            "miércoles": "miércoles",
        }
    )

    @field_validator("day_aliases")
    @classmethod
    def _fold_aliases(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType({_fold(k): _fold(v) for k, v in value.items()})

    @field_serializer("day_aliases")
    def _dump_day_aliases(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    def normalize(self, day: str) -> str:
        """Canonical spelling of a day name; unknown names come back folded."""
        folded = _fold(day)
        return self.day_aliases.get(folded, folded)

    def is_allowed(self, day: str) -> bool:
        canonical = self.normalize(day)
        return any(self.normalize(allowed) == canonical for allowed in self.allowed_days)


class ExtractionVocabulary(BaseModel):
    """Keywords and line labels that identify the fields of an event announcement."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    event_keywords: Tuple[str, ...] = ("pichanga", "ipi", "año nuevo")
    day_labels: Tuple[str, ...] = ("día:", "dia:")
    time_labels: Tuple[str, ...] = ("hora:",)
    location_labels: Tuple[str, ...] = ("lugar:",)
    placeholder: str = "-"  # Roster slot left open

    @field_validator("event_keywords", "day_labels", "time_labels", "location_labels")
    @classmethod
    def _fold_terms(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(_fold(term) for term in value if term.strip())
