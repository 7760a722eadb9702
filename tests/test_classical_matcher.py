import pytest

from halalmatch.models import AuthorityEntry
from halalmatch.matchers.classical_matcher import (
    FuzzyCandidate,
    edit_similarity,
    is_fuzzy_candidate,
    name_similarity,
    select_best_candidate,
    words_similar,
)


def _entry(name, postal="000000", number="C000"):
    return AuthorityEntry(name=name, postal_code=postal, certificate_number=number)


@pytest.mark.parametrize("word1, word2", [
    ("restaurant", "resto"),
    ("rest", "resto"),
    ("centre", "ctr"),
    ("international", "intl"),
    ("kitchen", "kitch"),
    ("corner", "cnr"),
    ("house", "hse"),
])
def test_abbreviation_pairs_are_similar(word1, word2):
    assert words_similar(word1, word2)
    assert words_similar(word2, word1)


def test_near_spellings_are_similar():
    # one edit over 7 characters -> 0.857
    assert words_similar("juliet", "julliet")
    assert words_similar("briyani", "biryani") is False  # two edits over 7 characters


def test_unrelated_words_are_not_similar():
    assert not words_similar("nasi", "prata")
    assert not words_similar("house", "centre")


def test_edit_similarity_bounds():
    assert edit_similarity("kopi", "kopi") == 1.0
    assert edit_similarity("", "") == 1.0
    assert edit_similarity("abcde", "vwxyz") == 0.0


def test_name_similarity_counts_containment():
    similarity, matching = name_similarity(["hajah", "maimunah", "restaurant"], ["hajah", "maimunah", "rest"])
    assert matching == 3
    assert similarity == 1.0


def test_name_similarity_uses_larger_token_count():
    similarity, matching = name_similarity(["zam", "zam"], ["zam", "zam", "restaurant", "north"])
    assert matching == 2
    assert similarity == 0.5


def test_name_similarity_empty_tokens():
    assert name_similarity([], ["abc"]) == (0.0, 0)
    assert name_similarity(["abc"], []) == (0.0, 0)


def test_single_word_merchant_never_qualifies():
    assert not is_fuzzy_candidate(1.0, 1, 1)
    assert is_fuzzy_candidate(0.9, 2, 2)
    assert not is_fuzzy_candidate(0.89, 2, 2)


def test_postal_match_beats_higher_similarity():
    far = FuzzyCandidate(entry=_entry("far", number="C1"), similarity=0.95, postal_match=False)
    near = FuzzyCandidate(entry=_entry("near", number="C2"), similarity=0.91, postal_match=True)

    assert select_best_candidate([far, near]) is near
    assert select_best_candidate([near, far]) is near


def test_similarity_breaks_ties_within_postal_status():
    low = FuzzyCandidate(entry=_entry("low"), similarity=0.91, postal_match=False)
    high = FuzzyCandidate(entry=_entry("high"), similarity=0.95, postal_match=False)
    same = FuzzyCandidate(entry=_entry("same"), similarity=0.95, postal_match=False)

    assert select_best_candidate([low, high, same]) is high


def test_select_best_candidate_empty():
    assert select_best_candidate([]) is None
