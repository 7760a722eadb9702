import pytest

from halalmatch.models import AuthorityEntry, MatchSource, MatchVerdict


def test_matched_verdict_carries_certificate():
    entry = AuthorityEntry(name="ABC", postal_code="111111", certificate_number="C1")

    verdict = MatchVerdict.matched(MatchSource.SIMILAR_NAME, entry)

    assert verdict.is_halal is True
    assert verdict.certificate_number == "C1"


@pytest.mark.parametrize("kwargs", [
    {"is_halal": True, "source": MatchSource.EXACT_NAME},
    {"is_halal": False, "source": MatchSource.NOT_FOUND, "certificate_number": "C1"},
    {"is_halal": True, "source": MatchSource.REGISTER_UNAVAILABLE, "certificate_number": "C1"},
    {"is_halal": False, "source": MatchSource.EXACT_NAME_POSTAL},
])
def test_verdict_rejects_inconsistent_fields(kwargs):
    with pytest.raises(ValueError):
        MatchVerdict(**kwargs)


def test_negative_verdicts_have_no_certificate():
    assert MatchVerdict.not_found().certificate_number is None
    assert MatchVerdict.unavailable().certificate_number is None
    assert MatchVerdict.unavailable().source is MatchSource.REGISTER_UNAVAILABLE
