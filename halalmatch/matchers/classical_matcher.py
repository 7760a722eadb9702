from dataclasses import dataclass
from typing import Iterable, List, Optional
from rapidfuzz.distance import Levenshtein
from halalmatch.config import FUZZY_THRESHOLD, WORD_SIMILARITY_THRESHOLD, MIN_MATCHING_WORDS
from halalmatch.models import AuthorityEntry

# Known abbreviation groups; any two words in the same group are interchangeable
ABBREVIATION_GROUPS = [
    frozenset({"restaurant", "rest", "resto"}),
    frozenset({"private", "pte", "pvt"}),
    frozenset({"limited", "ltd"}),
    frozenset({"centre", "center", "ctr"}),
    frozenset({"company", "co"}),
    frozenset({"international", "intl"}),
    frozenset({"house", "hse"}),
    frozenset({"kitchen", "kitchn", "kitch"}),
    frozenset({"food", "fd"}),
    frozenset({"corner", "cnr"}),
]


@dataclass(frozen=True)
class FuzzyCandidate:
    """Register entry that passed the fuzzy name threshold."""
    entry: AuthorityEntry
    similarity: float
    postal_match: bool


def are_abbreviations(word1: str, word2: str) -> bool:
    return any(word1 in group and word2 in group for group in ABBREVIATION_GROUPS)


def edit_similarity(word1: str, word2: str) -> float:
    """Levenshtein similarity relative to the longer word, in [0, 1]."""
    longer = max(len(word1), len(word2))
    if longer == 0:
        return 1.0
    return (longer - Levenshtein.distance(word1, word2)) / longer


def words_similar(
    word1: str,
    word2: str,
    threshold: float = WORD_SIMILARITY_THRESHOLD,
) -> bool:
    """
    Decide whether two normalized words refer to the same thing.

    Args:
        word1 (str): First word.
        word2 (str): Second word.
        threshold (float): Minimum edit similarity for non-abbreviation pairs.

    Returns:
        bool: True for equal words, known abbreviation pairs, or near-identical spellings.
    """
    if word1 == word2:
        return True
    if are_abbreviations(word1, word2):
        return True
    return edit_similarity(word1, word2) >= threshold


def _word_matches(word: str, other_words: List[str]) -> bool:
    return any(
        other in word or word in other or words_similar(word, other)
        for other in other_words
    )


def name_similarity(merchant_tokens: List[str], entry_tokens: List[str]) -> tuple:
    """
    Score token overlap between a merchant name and a register entry name.

    Args:
        merchant_tokens (List[str]): Tokens of the normalized merchant name.
        entry_tokens (List[str]): Tokens of the normalized entry name.

    Returns:
        tuple: (similarity, matching_word_count). Similarity is the share of
               merchant tokens with a counterpart, over the larger token count.
    """
    if not merchant_tokens or not entry_tokens:
        return 0.0, 0
    matching = [word for word in merchant_tokens if _word_matches(word, entry_tokens)]
    return len(matching) / max(len(merchant_tokens), len(entry_tokens)), len(matching)


def is_fuzzy_candidate(
    similarity: float,
    matching_words: int,
    merchant_word_count: int,
    threshold: float = FUZZY_THRESHOLD,
    min_words: int = MIN_MATCHING_WORDS,
) -> bool:
    return similarity >= threshold and matching_words >= min_words and merchant_word_count >= min_words


def _ranks_higher(candidate: FuzzyCandidate, best: FuzzyCandidate) -> bool:
    # Postal match dominates, similarity breaks ties; full ties keep the earlier one
    if candidate.postal_match != best.postal_match:
        return candidate.postal_match
    return candidate.similarity > best.similarity


def select_best_candidate(candidates: Iterable[FuzzyCandidate]) -> Optional[FuzzyCandidate]:
    """Pick the strongest fuzzy candidate, or None when there are none."""
    best = None
    for cand in candidates:
        if best is None or _ranks_higher(cand, best):
            best = cand
    return best
