from functools import cmp_to_key
from typing import Dict, Iterable, List, Tuple

from loguru import logger
from pydantic import BaseModel

from src.models.event import Event
from src.models.lookups import DayCalendar


class FilterReport(BaseModel):
    """Counts of what the day filter and deduplicator did with a batch of events."""

    received: int = 0
    rejected_day: int = 0
    duplicates_replaced: int = 0  # A later announcement replaced an earlier one
    duplicates_discarded: int = 0  # A duplicate that lost to the event already kept
    kept: int = 0


def _compare_instants(first: Event, second: Event) -> int:
    try:
        if first.source_instant < second.source_instant:
            return -1
        if first.source_instant > second.source_instant:
            return 1
        return 0
    except TypeError as e:
        logger.warning(f"Could not compare event instants ({first.key} / {second.key}): {e}")
        return 0


class DayFilter:
    """Keeps events held on allowed weekdays and collapses repeated announcements."""

    def __init__(self, calendar: DayCalendar):
        self.calendar = calendar

    def apply(self, events: Iterable[Event]) -> Tuple[List[Event], FilterReport]:
        """Filters, deduplicates and sorts events by source instant (ascending)."""
        report = FilterReport()
        admitted: List[Event] = []

        for event in events:
            report.received += 1
            if not self.calendar.is_allowed(event.day_of_week):
                report.rejected_day += 1
                logger.debug(
                    f"Dropping event from {event.sender} ({event.source_timestamp}): "
                    f"day '{event.day_of_week}' is not allowed."
                )
                continue
            admitted.append(
                event.model_copy(update={"day_of_week": self.calendar.normalize(event.day_of_week)})
            )

        unique = self.deduplicate(admitted, report)
        ordered = sorted(unique, key=cmp_to_key(_compare_instants))
        report.kept = len(ordered)

        logger.info(
            f"Day filter kept {report.kept} of {report.received} events "
            f"({report.rejected_day} on other days, "
            f"{report.duplicates_replaced + report.duplicates_discarded} duplicates)."
        )
        return ordered, report

    def deduplicate(self, events: Iterable[Event], report: FilterReport) -> List[Event]:
        """Keeps one event per (day, date); the strictly later announcement wins."""
        by_key: Dict[Tuple[str, str], Event] = {}

        for event in events:
            key = (event.day_of_week, event.date)
            existing = by_key.get(key)
            if existing is None:
                by_key[key] = event
                continue

            if self._is_newer(event, existing):
                by_key[key] = event
                report.duplicates_replaced += 1
                logger.debug(
                    f"Replacing duplicate event {event.key}: "
                    f"{existing.sender} ({existing.source_timestamp}) -> "
                    f"{event.sender} ({event.source_timestamp})"
                )
            else:
                report.duplicates_discarded += 1
                logger.debug(
                    f"Keeping earlier announcement for {existing.key}, "
                    f"discarding {event.sender} ({event.source_timestamp})"
                )

        return list(by_key.values())

    @staticmethod
    def _is_newer(candidate: Event, existing: Event) -> bool:
        # A fallback instant is the processing time, not a real message time
        if candidate.instant_is_fallback or existing.instant_is_fallback:
            return False
        try:
            return candidate.source_instant > existing.source_instant
        except TypeError as e:
            logger.warning(f"Could not compare duplicate events for {existing.key}: {e}")
            return False
