from typing import Dict, Iterable, List

from loguru import logger

from src.models.event import Event
from src.models.identity import Identity
from src.normalization.names import NameNormalizer


class AttendanceAggregator:
    """Counts roster appearances per canonical player name."""

    def __init__(self, name_normalizer: NameNormalizer):
        self.names = name_normalizer

    def aggregate(self, events: Iterable[Event]) -> Dict[str, Identity]:
        """Builds identities keyed by canonical name, in first-seen order."""
        identities: Dict[str, Identity] = {}
        discarded = 0

        for event in events:
            event_key = event.key
            for raw_name in event.players:
                try:
                    normalized = self.names.normalize(raw_name)
                except Exception as e:
                    logger.exception(f"Error normalizing player {raw_name!r} in event {event_key}: {e}")
                    discarded += 1
                    continue
                if normalized is None:
                    discarded += 1
                    continue

                identity = identities.get(normalized.canonical_name)
                if identity is None:
                    identity = Identity(canonical_name=normalized.canonical_name)
                    identities[normalized.canonical_name] = identity

                identity.attendance_count += 1
                if event_key not in identity.events:
                    identity.events.append(event_key)
                if normalized.variation not in identity.variations:
                    identity.variations.append(normalized.variation)

        if discarded:
            logger.debug(f"Discarded {discarded} player token(s) that cleaned to nothing.")
        logger.info(f"Aggregated attendance for {len(identities)} players.")
        return identities

    def rank(self, events: Iterable[Event]) -> List[Identity]:
        """Identities sorted by attendance (descending), ties in first-seen order."""
        identities = self.aggregate(events)
        # sorted() is stable, so equal counts keep insertion order
        return sorted(identities.values(), key=lambda identity: -identity.attendance_count)
