import pytest
from unittest.mock import AsyncMock, MagicMock

from halalmatch.matchers.halal_matcher import HalalMatcher


def register_payload(*rows):
    """Build a register payload from (name, postal, number) tuples."""
    return [{"name": name, "postal": postal, "number": number} for name, postal, number in rows]


def mock_client(return_value=None, side_effect=None):
    client = MagicMock()
    client.fetch_register = AsyncMock(return_value=return_value, side_effect=side_effect)
    return client


@pytest.fixture
def no_sleep():
    return AsyncMock()


@pytest.fixture
def make_matcher(no_sleep):
    def _make(*rows, **kwargs):
        client = kwargs.pop("client", None) or mock_client(return_value=register_payload(*rows))
        kwargs.setdefault("sleep", no_sleep)
        return HalalMatcher(client, **kwargs)
    return _make
