import logging
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.models.enums import NamingPolicy, SimilarityLevel
from src.models.lookups import AliasTable, DayCalendar, ExtractionVocabulary


def _default_player_aliases() -> Dict[str, str]:
    return {
        "conde": "Spectre",
        "Spectre": "Spectre",
        "Dayler": "Dayler",
        "Deyler": "Dayler",
        "Kenyi": "Sebas",
        "Sebas": "Sebas",
        "Sebastian": "Sebas",
    }


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Roster Configuration
    player_aliases: Dict[str, str] = Field(
        default_factory=_default_player_aliases,
        description="Raw player name (any case) -> canonical display name. JSON in the environment.",
    )
    allowed_days: List[str] = Field(
        default_factory=lambda: ["viernes", "miércoles"],
        description="Weekdays whose events are counted.",
    )
    day_aliases: Dict[str, str] = Field(
        default_factory=lambda: {
            "vienes": "viernes",
            "viernes": "viernes",
            "miercoles": "miércoles",
            "miércoles": "miércoles",
        },
        description="Misspelled or accent-free day names -> canonical day name.",
    )
    event_keywords: List[str] = Field(
        default_factory=lambda: ["pichanga", "ipi", "año nuevo"],
        description="Words that mark a line as the event title.",
    )

    # Consolidation Settings
    similarity_level: SimilarityLevel = Field(
        SimilarityLevel.MODERATE,
        description="STRICT (0.90), MODERATE (0.80) or FLEXIBLE (0.70); 1/2/3 also accepted.",
    )
    naming_policy: NamingPolicy = Field(
        NamingPolicy.MOST_FREQUENT_VARIATION,
        description="How a merged player is named.",
    )
    min_attendance: Optional[int] = Field(
        None, ge=0, description="Drop consolidated players below this attendance."
    )

    # Output Configuration
    output_dir: str = Field("output", description="Directory for the JSON stage outputs.")

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("similarity_level", mode="before")
    @classmethod
    def _numeric_similarity_level(cls, value):
        if isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
            return SimilarityLevel.from_level(int(value))
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def alias_table(self) -> AliasTable:
        return AliasTable.from_mapping(self.player_aliases)

    def day_calendar(self) -> DayCalendar:
        return DayCalendar(allowed_days=tuple(self.allowed_days), day_aliases=self.day_aliases)

    def extraction_vocabulary(self) -> ExtractionVocabulary:
        return ExtractionVocabulary(event_keywords=tuple(self.event_keywords))


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
