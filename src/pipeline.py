from datetime import datetime
from typing import Callable, Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from src.extraction.extractor import EventExtractor
from src.models.enums import NamingPolicy, SimilarityLevel
from src.models.event import Event
from src.models.identity import ConsolidatedIdentity, Identity
from src.models.lookups import AliasTable, DayCalendar, ExtractionVocabulary
from src.models.message import RawMessage
from src.normalization.days import DayFilter, FilterReport
from src.normalization.names import NameNormalizer
from src.parsing.assembler import MessageAssembler
from src.parsing.timestamps import TimestampNormalizer
from src.stats.aggregator import AttendanceAggregator
from src.stats.clusterer import SimilarityClusterer
from src.stats.summary import (
    AliasReport,
    EventSummary,
    MessageSummary,
    RankingSummary,
    build_alias_report,
    summarize_events,
    summarize_messages,
    summarize_ranking,
)


class PipelineResult(BaseModel):
    """Everything one run produces, stage by stage."""

    messages: List[RawMessage] = Field(default_factory=list)
    events: List[Event] = Field(default_factory=list)
    filter_report: FilterReport = Field(default_factory=FilterReport)
    ranking: List[Identity] = Field(default_factory=list)
    consolidated: List[ConsolidatedIdentity] = Field(default_factory=list)
    message_summary: MessageSummary
    event_summary: EventSummary
    ranking_summary: RankingSummary
    alias_report: AliasReport


class RosterPipeline:
    """Chat lines -> messages -> events -> ranked identities -> consolidated roster."""

    def __init__(
        self,
        aliases: Optional[AliasTable] = None,
        calendar: Optional[DayCalendar] = None,
        vocabulary: Optional[ExtractionVocabulary] = None,
        similarity_level: SimilarityLevel = SimilarityLevel.MODERATE,
        naming_policy: NamingPolicy = NamingPolicy.MOST_FREQUENT_VARIATION,
        min_attendance: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.aliases = aliases or AliasTable()
        timestamps = TimestampNormalizer(clock=clock)

        self.assembler = MessageAssembler()
        self.extractor = EventExtractor(vocabulary or ExtractionVocabulary(), timestamps)
        self.day_filter = DayFilter(calendar or DayCalendar())
        self.aggregator = AttendanceAggregator(NameNormalizer(self.aliases))
        self.clusterer = SimilarityClusterer(
            level=similarity_level,
            naming_policy=naming_policy,
            min_attendance=min_attendance,
        )

    def run(self, lines: Iterable[str]) -> PipelineResult:
        logger.info("Starting roster pipeline...")

        messages = self.assembler.assemble(lines)
        extracted = self.extractor.extract_all(messages)
        events, report = self.day_filter.apply(extracted)
        ranking = self.aggregator.rank(events)
        consolidated = self.clusterer.consolidate(ranking)

        result = PipelineResult(
            messages=messages,
            events=events,
            filter_report=report,
            ranking=ranking,
            consolidated=consolidated,
            message_summary=summarize_messages(messages),
            event_summary=summarize_events(events),
            ranking_summary=summarize_ranking(ranking, total_events=len(events)),
            alias_report=build_alias_report(ranking, self.aliases),
        )
        logger.info(
            f"Pipeline finished: {len(messages)} messages, {len(events)} events, "
            f"{len(ranking)} players, {len(consolidated)} consolidated."
        )
        return result
