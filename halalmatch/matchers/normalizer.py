import re
from typing import List

CORPORATE_TOKENS = ("pte", "ltd", "private", "limited", "sdn", "bhd")

_CORPORATE_RE = re.compile(r"\b(?:" + "|".join(CORPORATE_TOKENS) + r")\b")
# "stall 12", "unit 5", "#01-23", "# 02-105a"
_UNIT_RE = re.compile(r"(?:\b(?:stall|unit)\b|#)[^\w]*\d+[a-z]?(?:-\d+[a-z]?)?\b")
_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def _normalize_once(name: str) -> str:
    name = name.lower()
    name = _CORPORATE_RE.sub("", name)
    name = _UNIT_RE.sub("", name)
    name = _PUNCT_RE.sub(" ", name)
    return _SPACE_RE.sub(" ", name).strip()


def normalize(raw: str) -> str:
    """
    Canonicalize an establishment name for comparison.

    Lowercases, drops corporate suffixes and stall/unit numbers, turns
    punctuation into spaces and collapses whitespace. Punctuation removal can
    expose new stall/unit patterns ("stall:12" -> "stall 12"), so the pass is
    repeated until the output is a fixed point.

    Args:
        raw (str): Raw establishment name.

    Returns:
        str: Normalized name; empty for empty or whitespace-only input.

    Examples:
        >>> normalize("ABC Pte Ltd #01-23")
        'abc'
        >>> normalize("Al-Falah Restaurant")
        'al falah restaurant'
    """
    current = _normalize_once(raw or "")
    while True:
        # After the first pass every further change only removes text
        nxt = _normalize_once(current)
        if nxt == current:
            return current
        current = nxt


def tokenize(clean: str, min_length: int = 3) -> List[str]:
    """Split a normalized name into words of at least `min_length` characters."""
    return [word for word in clean.split(" ") if len(word) >= min_length]
