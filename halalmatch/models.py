"""
Typed data models for the halal matching pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class MerchantRecord:
    """Input merchant record loaded from the merchant directory."""
    name: str
    postal_code: str  # 6-digit Singapore postal code, compared as a string
    id: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class AuthorityEntry:
    """Certified establishment from the halal certification register."""
    name: str
    postal_code: str
    certificate_number: str
    address: Optional[str] = None


class MatchSource(str, Enum):
    """Evidence path behind a verdict."""
    EXACT_NAME_POSTAL = "EXACT_NAME_POSTAL"
    EXACT_NAME = "EXACT_NAME"
    SIMILAR_NAME_POSTAL = "SIMILAR_NAME_POSTAL"
    SIMILAR_NAME = "SIMILAR_NAME"
    NOT_FOUND = "NOT_FOUND"
    REGISTER_UNAVAILABLE = "REGISTER_UNAVAILABLE"


MATCHED_SOURCES = frozenset({
    MatchSource.EXACT_NAME_POSTAL,
    MatchSource.EXACT_NAME,
    MatchSource.SIMILAR_NAME_POSTAL,
    MatchSource.SIMILAR_NAME,
})


class RegisterState(str, Enum):
    """Lifecycle of the loaded register: UNINITIALIZED -> LOADING -> READY | UNAVAILABLE."""
    UNINITIALIZED = "UNINITIALIZED"
    LOADING = "LOADING"
    READY = "READY"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(frozen=True)
class MatchVerdict:
    """Final matching result for a merchant."""
    is_halal: bool
    source: MatchSource
    certificate_number: Optional[str] = None  # Set iff is_halal

    def __post_init__(self):
        matched = self.source in MATCHED_SOURCES
        if self.is_halal != matched:
            raise ValueError(f"is_halal={self.is_halal} is inconsistent with source {self.source.value}")
        if self.is_halal != (self.certificate_number is not None):
            raise ValueError("certificate_number must be set if and only if is_halal is true")

    @classmethod
    def matched(cls, source: MatchSource, entry: AuthorityEntry) -> "MatchVerdict":
        return cls(is_halal=True, source=source, certificate_number=entry.certificate_number)

    @classmethod
    def not_found(cls) -> "MatchVerdict":
        return cls(is_halal=False, source=MatchSource.NOT_FOUND)

    @classmethod
    def unavailable(cls) -> "MatchVerdict":
        return cls(is_halal=False, source=MatchSource.REGISTER_UNAVAILABLE)
