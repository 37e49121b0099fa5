from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class Identity(BaseModel):
    """Attendance record for one canonical player name."""

    canonical_name: str
    # Counts roster occurrences, so a name listed twice in one event counts twice
    attendance_count: int = Field(0, ge=0)
    events: List[str] = Field(default_factory=list, description="Distinct event keys.")
    variations: List[str] = Field(
        default_factory=list, description="Distinct raw tokens seen for this name."
    )

    @computed_field  # type: ignore[misc]
    @property
    def unique_events(self) -> int:
        return len(self.events)

    @computed_field  # type: ignore[misc]
    @property
    def average_attendance_per_event(self) -> float:
        if not self.events:
            return 0.0
        return round(self.attendance_count / len(self.events), 2)

    @computed_field  # type: ignore[misc]
    @property
    def first_event(self) -> Optional[str]:
        return self.events[0] if self.events else None

    @computed_field  # type: ignore[misc]
    @property
    def last_event(self) -> Optional[str]:
        return self.events[-1] if self.events else None

    @computed_field  # type: ignore[misc]
    @property
    def recent_events(self) -> List[str]:
        return self.events[-3:]


class ConsolidatedIdentity(BaseModel):
    """One or more identities merged by the similarity clusterer."""

    name: str
    total_attendance: int = Field(..., ge=0)
    variations: List[str] = Field(default_factory=list)
    members: List[str] = Field(
        default_factory=list,
        description="Canonical names of the merged identities, seed first.",
    )
    events: List[str] = Field(default_factory=list)
