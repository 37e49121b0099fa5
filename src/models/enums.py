from enum import Enum


class SimilarityLevel(str, Enum):
    STRICT = "STRICT"  # 0.90
    MODERATE = "MODERATE"  # 0.80
    FLEXIBLE = "FLEXIBLE"  # 0.70

    @property
    def threshold(self) -> float:
        return _SIMILARITY_THRESHOLDS[self]

    @classmethod
    def from_level(cls, level: int) -> "SimilarityLevel":
        """Maps the numeric levels (1 = strict, 2 = moderate, 3 = flexible)."""
        try:
            return _NUMERIC_LEVELS[level]
        except KeyError:
            raise ValueError(f"Unknown similarity level: {level}") from None


_SIMILARITY_THRESHOLDS = {
    SimilarityLevel.STRICT: 0.90,
    SimilarityLevel.MODERATE: 0.80,
    SimilarityLevel.FLEXIBLE: 0.70,
}

_NUMERIC_LEVELS = {
    1: SimilarityLevel.STRICT,
    2: SimilarityLevel.MODERATE,
    3: SimilarityLevel.FLEXIBLE,
}


class NamingPolicy(str, Enum):
    MOST_FREQUENT_VARIATION = "MOST_FREQUENT_VARIATION"
    SEED_NAME = "SEED_NAME"  # Canonical name of the first identity in the cluster


class TimestampShape(str, Enum):
    # Declaration order is the matching priority
    DATE_TIME_SECONDS_MERIDIEM = "DATE_TIME_SECONDS_MERIDIEM"
    DATE_TIME_MERIDIEM = "DATE_TIME_MERIDIEM"
    DATE_TIME_SECONDS = "DATE_TIME_SECONDS"
    DATE_ONLY = "DATE_ONLY"
