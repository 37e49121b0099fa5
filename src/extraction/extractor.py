import re
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from src.models.event import Event
from src.models.lookups import ExtractionVocabulary
from src.models.message import RawMessage
from src.parsing.timestamps import TimestampNormalizer

PLAYER_LINE_PATTERN = re.compile(r"^\d+\.")
# "1. - Alex" or "2. Moises(4)"
PLAYER_ENTRY_PATTERN = re.compile(r"^\d+\.\s*-?\s*(.+)")
NUMBERED_LIST_PATTERN = re.compile(r"\d+\.\s*-?\s*\w+")
# "\u200e<This message was edited>" appended by the chat client
EDIT_ANNOTATION_PATTERN = re.compile(r"\u200e<[^>]+>")


class EventExtractionError(Exception):
    """Raised when a message looked like an event but could not be turned into one."""

    pass


class EventExtractor:
    """Detects event announcements in chat messages and extracts their fields."""

    def __init__(
        self,
        vocabulary: ExtractionVocabulary,
        timestamp_normalizer: Optional[TimestampNormalizer] = None,
    ):
        self.vocabulary = vocabulary
        self.timestamps = timestamp_normalizer or TimestampNormalizer()
        self._detection_patterns = self._build_detection_patterns(vocabulary)

    def extract_all(self, messages: Iterable[RawMessage]) -> List[Event]:
        """Extracts events from every message that looks like an announcement, in order."""
        events: List[Event] = []
        scanned = 0
        for message in messages:
            scanned += 1
            event = self.extract(message)
            if event:
                events.append(event)
        logger.info(f"Extracted {len(events)} events from {scanned} messages.")
        return events

    def extract(self, message: RawMessage) -> Optional[Event]:
        """Returns the Event announced by the message, or None if it is not an announcement.

        Errors while extracting a single message are logged and the message is skipped.
        """
        if not self.is_event_message(message.content):
            return None
        try:
            return self._parse_event(message)
        except Exception as e:
            logger.exception(
                f"Error extracting event from message by {message.sender} ({message.timestamp}): {e}"
            )
            logger.debug(f"Problematic message: {message.raw_text!r}")
            return None

    def is_event_message(self, content: str) -> bool:
        return any(pattern.search(content) for pattern in self._detection_patterns)

    def _parse_event(self, message: RawMessage) -> Event:
        name = ""
        day = ""
        time = ""
        location = ""
        players: List[str] = []
        vocab = self.vocabulary

        for line in message.content.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue
            lowered = stripped.lower()

            if any(keyword in lowered for keyword in vocab.event_keywords):
                name = stripped
                continue

            day_value = self._label_value(stripped, lowered, vocab.day_labels)
            if day_value is not None:
                day = day_value
                continue
            time_value = self._label_value(stripped, lowered, vocab.time_labels)
            if time_value is not None:
                time = time_value
                continue
            location_value = self._label_value(stripped, lowered, vocab.location_labels)
            if location_value is not None:
                location = location_value
                continue

            if PLAYER_LINE_PATTERN.match(stripped):
                player = self._parse_player(stripped)
                if player:
                    players.append(player)

        try:
            normalized = self.timestamps.normalize(message.timestamp)
            return Event(
                name=name,
                day_of_week=day,
                date=self.timestamps.extract_date(message.timestamp),
                time=time,
                location=location,
                players=players,
                source_timestamp=message.timestamp,
                source_instant=normalized.instant,
                instant_is_fallback=normalized.is_fallback,
                sender=message.sender,
            )
        except ValueError as e:
            raise EventExtractionError(f"Invalid event fields: {e}") from e

    def _parse_player(self, line: str) -> Optional[str]:
        match = PLAYER_ENTRY_PATTERN.match(line)
        if not match:
            return None
        player = EDIT_ANNOTATION_PATTERN.sub("", match.group(1).strip()).strip()
        if not player or player == self.vocabulary.placeholder:
            return None
        return player

    @staticmethod
    def _label_value(line: str, lowered_line: str, labels: Tuple[str, ...]) -> Optional[str]:
        """Text after the first matching label prefix, or None if no label matches."""
        for label in labels:
            if lowered_line.startswith(label):
                return line[len(label) :].strip()
        return None

    @staticmethod
    def _build_detection_patterns(vocabulary: ExtractionVocabulary) -> List[re.Pattern]:
        def label_pattern(labels: Tuple[str, ...], value: str) -> Optional[re.Pattern]:
            if not labels:
                return None
            alternatives = "|".join(re.escape(label) for label in labels)
            return re.compile(rf"(?:{alternatives})\s*{value}", re.IGNORECASE)

        patterns = [
            NUMBERED_LIST_PATTERN,
            label_pattern(vocabulary.day_labels, r"\w+"),  # "Día: viernes"
            label_pattern(vocabulary.time_labels, r"[\d:]+"),  # "Hora: 9:00"
            label_pattern(vocabulary.location_labels, r".+"),  # "Lugar: Potokar"
        ]
        return [p for p in patterns if p is not None]
