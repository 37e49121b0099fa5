# src/utils/text_utils.py
import re
import unicodedata
from collections import Counter

# Directional marks and BOM found around system text in chat exports (character-class ranges)
INVISIBLE_MARKERS = "\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff"
_INVISIBLE_RE = re.compile(f"[{INVISIBLE_MARKERS}]")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]")


def strip_invisible_markers(text: str) -> str:
    return _INVISIBLE_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def comparison_key(name: str) -> str:
    """Accent-free, punctuation-free, lower-cased form of a name used for similarity scoring."""
    decomposed = unicodedata.normalize("NFD", name)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return collapse_whitespace(_NON_WORD_RE.sub("", without_marks)).lower()


def compare_two_strings(first: str, second: str) -> float:
    """Dice coefficient over character bigrams, ignoring whitespace.

    Returns 1.0 for identical strings and 0.0 when either string is shorter
    than two characters (after whitespace removal).
    """
    first = _WHITESPACE_RE.sub("", first)
    second = _WHITESPACE_RE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i : i + 2] for i in range(len(first) - 1))

    intersection = 0
    for i in range(len(second) - 1):
        bigram = second[i : i + 2]
        if first_bigrams[bigram] > 0:
            first_bigrams[bigram] -= 1
            intersection += 1

    return (2.0 * intersection) / (len(first) + len(second) - 2)
