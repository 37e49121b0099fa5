import re
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

from src.models.lookups import AliasTable
from src.utils.text_utils import collapse_whitespace, strip_invisible_markers

# Applied in order
_ANNOTATION_PATTERNS = (
    re.compile(r"\([^)]*\)"),  # "Moises(4)"
    re.compile(r"\[[^\]]*\]"),
    re.compile(r"\{[^}]*\}"),
)
_ANGLE_BRACKETS = re.compile(r"[<>]")
_TRAILING_GO = re.compile(r"\s*\bgo\s*$", re.IGNORECASE)
_TRAILING_HYPHEN = re.compile(r"\s*-\s*$")

DEFAULT_DECORATIONS = "🔥⭐✨💪👑🏆⚽\ufe0f"  # Trailing variation selector left behind by some emoji


class NormalizedName(BaseModel):
    """A player token resolved to its canonical display name."""

    model_config = ConfigDict(frozen=True)

    canonical_name: str
    variation: str  # The original token, trimmed


class NameNormalizer:
    """Cleans raw roster tokens and resolves them through the alias table."""

    def __init__(self, aliases: AliasTable, decorations: str = DEFAULT_DECORATIONS):
        self.aliases = aliases
        self._decorations = re.compile(f"[{re.escape(decorations)}]") if decorations else None
        logger.debug(f"NameNormalizer initialized with {len(aliases)} aliases.")

    def clean(self, raw_name: str) -> str:
        """Strips annotations, decorations and stray punctuation. May return ''."""
        cleaned = raw_name
        for pattern in _ANNOTATION_PATTERNS:
            cleaned = pattern.sub("", cleaned)
        cleaned = _ANGLE_BRACKETS.sub("", strip_invisible_markers(cleaned))
        cleaned = _TRAILING_GO.sub("", cleaned)
        cleaned = _TRAILING_HYPHEN.sub("", cleaned)
        if self._decorations:
            cleaned = self._decorations.sub("", cleaned)
        return collapse_whitespace(cleaned)

    def normalize(self, raw_name: str) -> Optional[NormalizedName]:
        """Returns the canonical name for a token, or None if nothing is left after cleaning."""
        cleaned = self.clean(raw_name)
        if not cleaned:
            logger.debug(f"Discarding player token {raw_name!r}: empty after cleaning.")
            return None

        canonical = self.aliases.resolve(cleaned)
        if canonical is None:
            canonical = _title_case(cleaned)
        return NormalizedName(canonical_name=canonical, variation=raw_name.strip())


def _title_case(name: str) -> str:
    """Capitalizes the first letter of each space-separated word and lowers the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))
