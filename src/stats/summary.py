"""Batch statistics over the pipeline outputs."""

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from src.models.event import Event
from src.models.identity import Identity
from src.models.lookups import AliasTable
from src.models.message import RawMessage

# (label, lowest count, highest count or None for open-ended)
ATTENDANCE_BUCKETS = [
    ("20+", 20, None),
    ("15-19", 15, 19),
    ("10-14", 10, 14),
    ("5-9", 5, 9),
    ("1-4", 1, 4),
]


class MessageSummary(BaseModel):
    total_messages: int
    senders: List[str] = Field(default_factory=list, description="Distinct senders, first-seen order.")


class EventSummary(BaseModel):
    total_events: int
    events_per_day: Dict[str, int] = Field(default_factory=dict)
    average_players: float = 0.0


class RankingSummary(BaseModel):
    total_events: int
    total_players: int
    total_attendances: int
    average_attendance: float
    median_attendance: int = 0  # Upper median for an even count
    max_attendance: int
    min_attendance: int
    distribution: Dict[str, int] = Field(default_factory=dict)


class AliasEntry(BaseModel):
    name: str
    variations: List[str]
    attendance: int


class AliasReport(BaseModel):
    """Players seen under several spellings, plus players worth checking for missing aliases."""

    aliases_used: List[AliasEntry] = Field(default_factory=list)
    configured_aliases: Dict[str, str] = Field(default_factory=dict)
    players_to_review: List[AliasEntry] = Field(default_factory=list)


def summarize_messages(messages: Sequence[RawMessage]) -> MessageSummary:
    senders = list(dict.fromkeys(message.sender for message in messages))
    return MessageSummary(total_messages=len(messages), senders=senders)


def summarize_events(events: Sequence[Event]) -> EventSummary:
    per_day: Dict[str, int] = {}
    for event in events:
        per_day[event.day_of_week] = per_day.get(event.day_of_week, 0) + 1

    average = 0.0
    if events:
        average = round(sum(event.total_players for event in events) / len(events), 1)

    return EventSummary(total_events=len(events), events_per_day=per_day, average_players=average)


def summarize_ranking(identities: Sequence[Identity], total_events: int) -> RankingSummary:
    attendances = [identity.attendance_count for identity in identities]
    total = sum(attendances)

    distribution: Dict[str, int] = {}
    for label, low, high in ATTENDANCE_BUCKETS:
        distribution[label] = sum(
            1 for count in attendances if count >= low and (high is None or count <= high)
        )

    return RankingSummary(
        total_events=total_events,
        total_players=len(identities),
        total_attendances=total,
        average_attendance=round(total / len(attendances), 1) if attendances else 0.0,
        median_attendance=sorted(attendances)[len(attendances) // 2] if attendances else 0,
        max_attendance=max(attendances, default=0),
        min_attendance=min(attendances, default=0),
        distribution=distribution,
    )


def build_alias_report(
    identities: Sequence[Identity],
    aliases: AliasTable,
    review_min_attendance: int = 3,
    review_limit: Optional[int] = 20,
) -> AliasReport:
    aliases_used = [
        AliasEntry(
            name=identity.canonical_name,
            variations=list(identity.variations),
            attendance=identity.attendance_count,
        )
        for identity in identities
        if len(identity.variations) > 1
    ]

    to_review = [
        AliasEntry(
            name=identity.canonical_name,
            variations=list(identity.variations),
            attendance=identity.attendance_count,
        )
        for identity in identities
        if identity.attendance_count >= review_min_attendance and len(identity.variations) == 1
    ]
    if review_limit is not None:
        to_review = to_review[:review_limit]

    return AliasReport(
        aliases_used=aliases_used,
        configured_aliases=dict(aliases.aliases),
        players_to_review=to_review,
    )
