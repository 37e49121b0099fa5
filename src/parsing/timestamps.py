import re
from datetime import datetime
from typing import Callable, List, Optional, Pattern, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, computed_field

from src.models.enums import TimestampShape
from src.utils.text_utils import strip_invisible_markers

_DATE = r"(\d{1,2}/\d{1,2}/\d{2,4})"
_MERIDIEM = r"([ap]\.?\s*m\.?)"

# Tried in order, first match wins. Group 1 is the date, 2 the time, 3 the meridiem.
DEFAULT_STRATEGIES: List[Tuple[TimestampShape, Pattern[str]]] = [
    # "25/07/25, 12:13:12 p. m."
    (
        TimestampShape.DATE_TIME_SECONDS_MERIDIEM,
        re.compile(rf"^{_DATE},\s*(\d{{1,2}}:\d{{2}}:\d{{2}})\s*{_MERIDIEM}$", re.IGNORECASE),
    ),
    # "25/07/25, 12:13 p. m."
    (
        TimestampShape.DATE_TIME_MERIDIEM,
        re.compile(rf"^{_DATE},\s*(\d{{1,2}}:\d{{2}})\s*{_MERIDIEM}$", re.IGNORECASE),
    ),
    # "25/07/25, 12:13:12"
    (
        TimestampShape.DATE_TIME_SECONDS,
        re.compile(rf"^{_DATE},\s*(\d{{1,2}}:\d{{2}}:\d{{2}})$"),
    ),
    # "25/07/25"
    (TimestampShape.DATE_ONLY, re.compile(rf"^{_DATE}$")),
]


class TimestampFormatError(ValueError):
    """Raised when a timestamp matches none of the known shapes."""

    pass


class NormalizedTimestamp(BaseModel):
    """A parsed instant and the shape that produced it (None for the fallback)."""

    model_config = ConfigDict(frozen=True)

    instant: datetime
    shape: Optional[TimestampShape] = None

    @computed_field  # type: ignore[misc]
    @property
    def is_fallback(self) -> bool:
        return self.shape is None


class TimestampNormalizer:
    """Turns chat timestamps such as '25/07/25, 1:05:00 a. m.' into datetimes."""

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        strategies: Optional[List[Tuple[TimestampShape, Pattern[str]]]] = None,
    ):
        self.clock = clock
        self.strategies = strategies if strategies is not None else DEFAULT_STRATEGIES

    def parse_strict(self, timestamp: str) -> NormalizedTimestamp:
        """Parses the timestamp or raises TimestampFormatError."""
        clean = strip_invisible_markers(timestamp).strip()

        for shape, pattern in self.strategies:
            match = pattern.match(clean)
            if not match:
                continue
            groups = match.groups()
            date_part = groups[0]
            time_part = groups[1] if len(groups) > 1 else None
            period = groups[2] if len(groups) > 2 else None
            return NormalizedTimestamp(
                instant=self._build_instant(timestamp, date_part, time_part, period),
                shape=shape,
            )

        raise TimestampFormatError(f"Unrecognized timestamp format: {timestamp!r}")

    def normalize(self, timestamp: str) -> NormalizedTimestamp:
        """Parses the timestamp, falling back to the current time. Never raises."""
        try:
            return self.parse_strict(timestamp)
        except TimestampFormatError as e:
            logger.warning(f"{e}. Using current time as fallback.")
        except Exception as e:
            logger.warning(f"Error parsing timestamp {timestamp!r}: {e}. Using current time as fallback.")
        return NormalizedTimestamp(instant=self.clock(), shape=None)

    def extract_date(self, timestamp: str) -> str:
        """Returns the date text before the first comma, e.g. '25/07/25'."""
        clean = strip_invisible_markers(timestamp).strip()
        return clean.split(",", 1)[0].strip()

    def _build_instant(
        self,
        timestamp: str,
        date_part: str,
        time_part: Optional[str],
        period: Optional[str],
    ) -> datetime:
        day, month, year = (int(p) for p in date_part.split("/"))
        # Two-digit years belong to this century
        if year < 100:
            year += 2000

        hours = minutes = seconds = 0
        if time_part:
            components = [int(p) for p in time_part.split(":")]
            hours = components[0]
            minutes = components[1] if len(components) > 1 else 0
            seconds = components[2] if len(components) > 2 else 0

            if period:
                period_lower = period.lower()
                if "p" in period_lower and hours != 12:
                    hours += 12
                elif "a" in period_lower and hours == 12:
                    hours = 0

        try:
            return datetime(year, month, day, hours, minutes, seconds)
        except ValueError as e:
            raise TimestampFormatError(f"Invalid calendar value in timestamp {timestamp!r}: {e}") from e
