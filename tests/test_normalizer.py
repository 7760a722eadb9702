import pytest

from halalmatch.matchers.normalizer import normalize, tokenize


@pytest.mark.parametrize("raw, expected", [
    ("ABC Pte Ltd #01-23", "abc"),
    ("AL FALAH RESTAURANT PTE LTD", "al falah restaurant"),
    ("Al-Falah Restaurant", "al falah restaurant"),
    ("Stall 12 Chicken Rice", "chicken rice"),
    ("Nasi Padang (Unit 5)", "nasi padang"),
    ("Makan Sdn Bhd", "makan"),
    ("Warong  Private   Limited", "warong"),
    ("Pteranodon Cafe", "pteranodon cafe"),
    ("Ayam Penyet #02-105A", "ayam penyet"),
    ("", ""),
    ("   ", ""),
])
def test_normalize_examples(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", [
    "ABC Pte Ltd #01-23",
    "Stall:12 Mee Rebus",
    "1.2 Kopi",
    "Unit.5-Prata House",
    "S&P Bakery #B1-07",
    "  Ya Kun   Kaya   Toast!!  ",
    "pte.ltd.co",
    "ltd-pte stall - 3",
])
def test_normalize_is_idempotent(raw):
    """Punctuation that hides a stall number must not leave work for a second pass."""
    once = normalize(raw)
    assert normalize(once) == once


def test_normalize_strips_stall_hidden_behind_punctuation():
    assert normalize("Stall:12 Mee Rebus") == "mee rebus"


def test_normalize_handles_none():
    assert normalize(None) == ""


def test_tokenize_drops_short_words_and_keeps_order():
    assert tokenize("al falah restaurant by the sea") == ["falah", "restaurant", "the", "sea"]


def test_tokenize_empty():
    assert tokenize("") == []
