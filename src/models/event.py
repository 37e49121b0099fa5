from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, computed_field


class Event(BaseModel):
    """An event announcement extracted from a chat message."""

    name: str = ""
    # Raw day text after extraction, canonical spelling once it passes the day filter
    day_of_week: str = ""
    date: str = Field("", description="Date portion of the source timestamp, e.g. '25/07/25'.")
    time: str = ""
    location: str = ""
    players: List[str] = Field(
        default_factory=list, description="Raw player tokens in roster order."
    )
    source_timestamp: str
    source_instant: datetime
    # True when source_timestamp could not be parsed and source_instant is a fallback
    instant_is_fallback: bool = False
    sender: str

    @computed_field  # type: ignore[misc]
    @property
    def total_players(self) -> int:
        return len(self.players)

    @computed_field  # type: ignore[misc]
    @property
    def key(self) -> str:
        """Identifies the event inside an Identity's event list."""
        return f"{self.date} ({self.day_of_week})"
